"""TRIDASH — Provider & Account Models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Provider(str, Enum):
    """External analytics providers, one dashboard panel each."""

    GA4 = "ga4"  # web analytics
    GOOGLE_ADS = "google_ads"  # advertising
    METRICOOL = "metricool"  # social media

    @property
    def label(self) -> str:
        return PROVIDER_LABELS[self]


PROVIDER_LABELS = {
    Provider.GA4: "GA4",
    Provider.GOOGLE_ADS: "Google Ads",
    Provider.METRICOOL: "Metricool",
}


class ProviderAccountConfig(BaseModel):
    """A tenant's account on one provider.

    ``has_advertising_account`` only means something for Google Ads:
    False marks a tenant that legitimately runs no ads.
    """

    provider: Provider
    account_id: str = Field(description="GA4 property / Ads customer / Metricool blog id")
    name: str = Field(default="", description="Display name of the client")
    has_advertising_account: Optional[bool] = None

    model_config = {"frozen": True}
