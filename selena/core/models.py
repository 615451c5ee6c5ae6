import json
from typing import Any


# =============================================================================
# Data Models
# =============================================================================

class BaseModel:
    """Base model with dict-like access and serialization.

    Fields live in an internal dict, so payload keys such as ``get`` or
    ``to_dict`` never shadow the model's methods.
    """

    def __init__(self, **kwargs):
        object.__setattr__(self, "_data", dict(kwargs))

    @classmethod
    def from_dict(cls, data: dict):
        model = cls.__new__(cls)
        object.__setattr__(model, "_data", dict(data))
        return model

    def __getattr__(self, key):
        if key == "_data" or (key.startswith("__") and key.endswith("__")):
            raise AttributeError(key)
        try:
            return self._data[key]
        except KeyError:
            raise AttributeError(key) from None

    def __setattr__(self, key, value):
        self._data[key] = value

    def __getitem__(self, key):
        return self._data[key]

    def __setitem__(self, key, value):
        self._data[key] = value

    def __contains__(self, key):
        return key in self._data

    def get(self, key, default=None):
        return self._data.get(key, default)

    def keys(self):
        return self._data.keys()

    def to_dict(self) -> dict:
        result = {}
        for key, value in self._data.items():
            if isinstance(value, BaseModel):
                result[key] = value.to_dict()
            else:
                result[key] = value
        return result

    def model_dump_json(self, indent: int = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def __eq__(self, other):
        if isinstance(other, BaseModel):
            return self.to_dict() == other.to_dict()
        if isinstance(other, dict):
            return self.to_dict() == other
        return NotImplemented

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self._data.items())
        return f"{self.__class__.__name__}({fields})"

    def __str__(self):
        return self.__repr__()


class ChatResponse(BaseModel):
    """Chat completion result.

    ``response`` holds the generated text. Plain JSON payloads keep every
    field the server sent; streamed responses only carry ``response``.
    """

    def __init__(self, response: str = None, **kwargs):
        super().__init__(response=response, **kwargs)

    @property
    def response(self):
        return self._data.get("response")

    @classmethod
    def from_payload(cls, data: Any) -> Any:
        """Wrap a decoded JSON object. Non-object payloads are returned unchanged."""
        if isinstance(data, dict):
            return cls.from_dict(data)
        return data
