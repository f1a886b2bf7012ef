"""
pyredux 私有的 action 類型。

這些類型由函式庫自身持有，應用程式不應處理或顯式 dispatch 它們。
後綴在模組載入時隨機產生一次，避免與使用者定義的類型衝突。
"""
import uuid


def _random_suffix() -> str:
    return ".".join(uuid.uuid4().hex[:7])


class ActionTypes:
    INIT: str = "@@pyredux/INIT" + _random_suffix()
    REPLACE: str = "@@pyredux/REPLACE" + _random_suffix()

    @staticmethod
    def probe_unknown_action() -> str:
        """每次呼叫都產生一個新的未知類型，用於探測 reducer。"""
        return "@@pyredux/PROBE_UNKNOWN_ACTION" + _random_suffix()
