from pyredux import create_action

increment = create_action("[Counter] Increment")
decrement = create_action("[Counter] Decrement")
reset = create_action("[Counter] Reset", lambda value=0: value)
increment_by = create_action("[Counter] IncrementBy")
load_count_request = create_action("[Counter] LoadCountRequest")
load_count_success = create_action("[Counter] LoadCountSuccess")
load_count_failure = create_action("[Counter] LoadCountFailure")
