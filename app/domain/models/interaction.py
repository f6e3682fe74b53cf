from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field


class InteractionAction(str, Enum):
    VIEW = "view"
    PURCHASE = "purchase"
    ADD_TO_CART = "add_to_cart"
    CLICK_RECOMMENDATION = "click_recommendation"


# Actions that mean "this session already saw the product"
SEEN_ACTIONS = frozenset({
    InteractionAction.PURCHASE,
    InteractionAction.ADD_TO_CART,
    InteractionAction.VIEW,
})


class InteractionEvent(BaseModel):
    session_id: str
    product_code: str
    action: InteractionAction
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    model_config = {"frozen": True}

    def to_document(self) -> dict:
        return {
            "session_id": self.session_id,
            "product_code": self.product_code,
            "action": self.action.value,
            "created_at": self.created_at,
        }
