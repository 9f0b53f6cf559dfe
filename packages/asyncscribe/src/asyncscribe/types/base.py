# asyncscribe/types/base.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Default strict, immutable model for contract descriptors."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    def to_document(self) -> dict:
        """Dump with wire aliases (``$ref``, ``messageId``...) and without unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)
