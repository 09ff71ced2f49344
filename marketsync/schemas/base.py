"""
Base schemas with common functionality.
"""
import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

T = TypeVar('T', bound='PlatformPayload')


@dataclass
class MalformedItem:
    """A list item that could not be decoded; routines skip it"""
    raw: Any
    error: str

    @property
    def item_id(self) -> Any:
        return self.raw.get("id") if isinstance(self.raw, dict) else None


def _summarize(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'item'}: {err['msg']}"
        for err in error.errors()
    )


class PlatformPayload(BaseModel):
    """
    Base schema for objects decoded from a platform API response.

    Only the fields the sync routines read are declared; everything else the
    platform sends is kept, and the raw dict is retained so it can be
    forwarded to the other platform untouched.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True
    )

    _raw: Dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_api(cls: Type[T], data: Dict[str, Any]) -> T:
        """Decode one API object, remembering the raw payload"""
        instance = cls.model_validate(data)
        instance._raw = copy.deepcopy(data)
        return instance

    @classmethod
    def list_from_api(cls: Type[T], items: List[Any]) -> List[Union[T, MalformedItem]]:
        """
        Decode each item on its own. An item that fails validation comes back
        as a MalformedItem in its place, so the rest of the list still syncs.
        """
        decoded: List[Union[T, MalformedItem]] = []
        for item in items:
            try:
                decoded.append(cls.from_api(item))
            except ValidationError as e:
                decoded.append(MalformedItem(raw=item, error=_summarize(e)))
        return decoded

    def as_payload(self) -> Dict[str, Any]:
        """The object exactly as the platform returned it"""
        if self._raw:
            return copy.deepcopy(self._raw)
        return self.model_dump(mode="json")
