from typing import Annotated, ClassVar, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from datetime import datetime

class BaseSchema(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        # Infinity and NaN are valid to json.loads but not storable numbers
        allow_inf_nan=False,
    )

class TimestampSchema(BaseSchema):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class PatchSchema(BaseSchema):
    """Partial update: every field optional, but required ones may not be nulled."""

    required_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in self.model_fields_set:
            if name in self.required_fields and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)

NonEmptyStr = Annotated[str, Field(min_length=1)]
