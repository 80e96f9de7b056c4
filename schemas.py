"""
Inbound request bodies for the HTTP API.

Field names follow the wire format, so ``userProfile`` stays camelCase.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, StrictFloat, StrictStr, field_validator

from models import WeightVector


class WeightsIn(BaseModel):
    # Strict floats: ints are accepted, bools and numeric strings are not.
    price: StrictFloat = Field(0.3, ge=0, allow_inf_nan=False)
    reviews: StrictFloat = Field(0.3, ge=0, allow_inf_nan=False)
    rating: StrictFloat = Field(0.2, ge=0, allow_inf_nan=False)
    delivery: StrictFloat = Field(0.2, ge=0, allow_inf_nan=False)

    def to_weight_vector(self) -> WeightVector:
        return WeightVector(
            price=float(self.price),
            reviews=float(self.reviews),
            rating=float(self.rating),
            delivery=float(self.delivery),
        )


class RecommendationRequest(BaseModel):
    query: StrictStr = Field(..., description="Free-text shopping query; whitespace-only is rejected")
    weights: Optional[WeightsIn] = None
    userProfile: Optional[Dict[str, Any]] = None

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value

    def weight_vector(self) -> WeightVector:
        return self.weights.to_weight_vector() if self.weights else WeightVector()

    def user_profile(self) -> Dict[str, Any]:
        return dict(self.userProfile or {})
