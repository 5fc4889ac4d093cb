from typing import Any

from pydantic import BaseModel, ConfigDict


class ModelBase(BaseModel):
    """
    Base class for all matrioska tree models.

    Forbids unknown fields, freezes instances after construction,
    and allows host-supplied callables and metas as field values.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        arbitrary_types_allowed=True,
    )


JSONObject = dict[str, Any]
RealizedNode = Any
