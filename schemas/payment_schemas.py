from pydantic import BaseModel, ConfigDict, Field


class CheckoutSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId")


class CheckoutSessionResponse(BaseModel):
    url: str
