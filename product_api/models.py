# product_api/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict

# Products are open records: the declared fields document the usual shape
# for the OpenAPI schema, but values are stored exactly as the client sent
# them (no coercion, no type rejection).


class ProductIn(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {"name": "Laptop", "category": "Electronics", "price": 999.99, "quantity": 50}
        },
    )

    name: Any = Field(None, description="The product name", json_schema_extra={"type": "string"})
    category: Any = Field(None, description="The product category", json_schema_extra={"type": "string"})
    price: Any = Field(None, description="The product price", json_schema_extra={"type": "number"})

    def supplied_fields(self) -> Dict[str, Any]:
        """Client-supplied fields only, extras included."""
        data = {k: getattr(self, k) for k in self.model_fields_set if k in type(self).model_fields}
        data.update(self.model_extra or {})
        return data


class Product(ProductIn):
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {"id": "ABC3D", "name": "Laptop", "category": "Electronics", "price": 999.99, "quantity": 50}
        },
    )

    id: str = Field(..., description="The auto-generated id of the product")
