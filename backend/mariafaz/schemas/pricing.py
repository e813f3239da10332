from pydantic import BaseModel


class CalculatePriceRequest(BaseModel):
    # Loose types so missing or malformed fields get the pricing 400 instead of a 422
    property_id: str | None = None
    base_price: float | str | None = None
    target_date: str | None = None
    market_id: str | None = None


class CalculateRangeRequest(BaseModel):
    property_id: str | None = None
    base_price: float | str | None = None
    start_date: str | None = None
    end_date: str | None = None
    market_id: str | None = None


class ApplyRecommendationRequest(BaseModel):
    actual_price: float
