"""
Field access for engine inputs, which arrive either as pydantic/ORM objects
or as plain dicts decoded from JSON.
"""


def get_field(obj, name: str, default=None):
    if isinstance(obj, dict):
        value = obj.get(name, default)
    else:
        value = getattr(obj, name, default)
    return default if value is None else value
