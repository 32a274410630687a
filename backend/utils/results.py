# backend/utils/results.py
from schemas.common import UpdateResult

# Set fields on a loaded record and report it the way the clients expect:
# matched when the record exists, modified only when a value changed.
def set_fields(obj, **values) -> UpdateResult:
    if obj is None:
        return UpdateResult(matched_count=0, modified_count=0)
    changed = False
    for name, value in values.items():
        if getattr(obj, name) != value:
            setattr(obj, name, value)
            changed = True
    return UpdateResult(matched_count=1, modified_count=int(changed))
