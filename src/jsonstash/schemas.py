from pydantic import BaseModel, JsonValue


class Entry(BaseModel):
    """
    A single stored row: the key and its decoded JSON value.
    """
    id: str
    value: JsonValue = None
