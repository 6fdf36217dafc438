"""
Attribute schema models
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, Dict, Tuple

class AttributeSchema(BaseModel):
    """Keys a model admits from and sends to the API"""
    id_attribute: str = "id"
    rest_attributes: Tuple[str, ...] = ()
    defaults: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id_attribute": "id",
                "rest_attributes": ["id", "name", "done"],
                "defaults": {"name": "untitled", "done": False}
            }
        }
    )

    @model_validator(mode="after")
    def include_id_attribute(self) -> "AttributeSchema":
        """The identifier key is always a recognized attribute"""
        if self.id_attribute not in self.rest_attributes:
            object.__setattr__(
                self,
                "rest_attributes",
                (self.id_attribute,) + tuple(self.rest_attributes)
            )
        return self

    def recognizes(self, key: str) -> bool:
        return key in self.rest_attributes
