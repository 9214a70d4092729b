"""Lexicon document model.

Only the document envelope is modelled: the version, the NSID ``id`` and the
``type`` of each definition. Definition bodies pass through untouched.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from social.graze.atsyntax.syntax.nsid import NSID

PRIMARY_DEF_TYPES = frozenset({"record", "procedure", "query", "subscription"})
"""Definition types that may only appear as the ``main`` definition."""


class LexUserType(BaseModel):
    """A single lexicon definition, keyed by name in ``LexiconDoc.defs``."""

    model_config = ConfigDict(extra="allow")

    type: str


class LexiconDoc(BaseModel):
    """A lexicon schema document.

    Validation happens on construction (``LexiconDoc(**data)`` or
    ``LexiconDoc.model_validate(data)``) and raises
    ``pydantic.ValidationError``.
    """

    lexicon: Literal[1]
    id: str
    revision: Optional[int] = None
    description: Optional[str] = None
    defs: Dict[str, LexUserType]

    @field_validator("lexicon", mode="before")
    @classmethod
    def check_lexicon(cls, v: Any) -> Any:
        if v != 1:
            raise ValueError("Lexicon value must be 1.")
        return v

    @field_validator("id")
    @classmethod
    def check_id(cls, v: str) -> str:
        if not NSID.is_valid(v):
            raise ValueError("Must be a valid NSID.")
        return v

    @model_validator(mode="after")
    def check_primary_defs(self) -> "LexiconDoc":
        for def_id, definition in self.defs.items():
            if def_id != "main" and definition.type in PRIMARY_DEF_TYPES:
                raise ValueError(
                    "Records, procedures, queries, and subscriptions must be "
                    f"the main definition ({def_id})."
                )
        return self

    @property
    def nsid(self) -> NSID:
        return NSID.parse(self.id)
