"""TRIDASH — Provider Account Mapper.

One table keyed by (tenant id, provider). Lookups never fail: an unknown
tenant gets the provider's "default" entry, and a table without one falls
back to a hard-coded account.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ValidationError

from app.config import settings
from app.core.errors import ConfigurationError
from app.core.logging import get_logger
from app.models.accounts import Provider, ProviderAccountConfig

logger = get_logger("tenancy.accounts")

DEFAULT_TENANT = "default"

AccountTable = Dict[Tuple[str, Provider], ProviderAccountConfig]


def _entry(
    provider: Provider,
    account_id: str,
    name: str,
    has_advertising_account: Optional[bool] = None,
) -> ProviderAccountConfig:
    if provider == Provider.GOOGLE_ADS and has_advertising_account is None:
        has_advertising_account = True
    return ProviderAccountConfig(
        provider=provider,
        account_id=account_id,
        name=name,
        has_advertising_account=has_advertising_account,
    )


ART_UNLIMITED = "7d52dc8e-c603-4c7e-ad27-60c15a86c12f"
ALANS_ROOFING = "fdb96a2c-a6ad-4238-9747-06b3ce7e8840"
STRAIGHT_LINE = "61e7c938-fd52-4693-b79b-c2fb2349b61d"

# ─────────────────────────────────────────────
# STATIC MAPPING — (tenant, provider) → account
# ─────────────────────────────────────────────

STATIC_ACCOUNTS: AccountTable = {
    (DEFAULT_TENANT, Provider.GA4): _entry(Provider.GA4, "270323387", "Art Unlimited"),
    (DEFAULT_TENANT, Provider.GOOGLE_ADS): _entry(
        Provider.GOOGLE_ADS, "1196391424", "Art Unlimited"
    ),
    (DEFAULT_TENANT, Provider.METRICOOL): _entry(
        Provider.METRICOOL, "1920806", "Straightline Roofing"
    ),
    # Art Unlimited
    (ART_UNLIMITED, Provider.GA4): _entry(Provider.GA4, "270323387", "Art Unlimited"),
    (ART_UNLIMITED, Provider.GOOGLE_ADS): _entry(
        Provider.GOOGLE_ADS, "1196391424", "Art Unlimited"
    ),
    (ART_UNLIMITED, Provider.METRICOOL): _entry(
        Provider.METRICOOL, "1914400", "Art Unlimited"
    ),
    # Alans Roofing
    (ALANS_ROOFING, Provider.GA4): _entry(Provider.GA4, "266834246", "Alans Roofing"),
    (ALANS_ROOFING, Provider.GOOGLE_ADS): _entry(
        Provider.GOOGLE_ADS, "9499823115", "Alans Roofing"
    ),
    (ALANS_ROOFING, Provider.METRICOOL): _entry(
        Provider.METRICOOL, "1920864", "Alans Roofing"
    ),
    # Straight Line
    (STRAIGHT_LINE, Provider.GA4): _entry(Provider.GA4, "260457321", "Straight Line"),
    (STRAIGHT_LINE, Provider.GOOGLE_ADS): _entry(
        Provider.GOOGLE_ADS, "7116961973", "Straight Line"
    ),
    (STRAIGHT_LINE, Provider.METRICOOL): _entry(
        Provider.METRICOOL, "1920806", "Straightline Roofing"
    ),
}

# Used only if a table somehow lacks a "default" row for a provider
FALLBACK_ACCOUNTS: Dict[Provider, ProviderAccountConfig] = {
    provider: STATIC_ACCOUNTS[(DEFAULT_TENANT, provider)] for provider in Provider
}


# ─────────────────────────────────────────────
# FILE-BACKED MAPPING
# ─────────────────────────────────────────────


class AccountEntry(BaseModel):
    """One provider entry in the JSON mapping file."""

    account_id: str
    name: str = ""
    has_advertising_account: Optional[bool] = None


def validate_table(table: AccountTable) -> None:
    """Every provider needs a "default" row."""
    missing = [
        provider.value
        for provider in Provider
        if (DEFAULT_TENANT, provider) not in table
    ]
    if missing:
        raise ConfigurationError(
            "Account mapping has no default entry", missing=missing
        )


def load_account_table(path: str) -> AccountTable:
    """Load {"<tenant>": {"<provider>": {...}}} from a JSON file."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot read account mapping {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Account mapping {path} must be a JSON object")

    table: AccountTable = {}
    try:
        for tenant_id, providers in raw.items():
            for provider_key, entry in providers.items():
                provider = Provider(provider_key)
                parsed = AccountEntry.model_validate(entry)
                table[(tenant_id, provider)] = _entry(
                    provider,
                    parsed.account_id,
                    parsed.name,
                    parsed.has_advertising_account,
                )
    except (AttributeError, ValueError, ValidationError) as e:
        raise ConfigurationError(f"Invalid account mapping {path}: {e}") from e

    validate_table(table)
    logger.info(f"Loaded {len(table)} account mappings from {path}")
    return table


# ─────────────────────────────────────────────
# MAPPER
# ─────────────────────────────────────────────


class AccountMapper:
    """Resolve a tenant's account config for one provider."""

    def __init__(self, table: Optional[AccountTable] = None):
        self.table = table if table is not None else STATIC_ACCOUNTS

    def map_account(self, tenant_id: str, provider: Provider) -> ProviderAccountConfig:
        config = self.table.get((tenant_id, provider))
        if config is not None:
            return config

        default = self.table.get((DEFAULT_TENANT, provider))
        if default is not None:
            if tenant_id != DEFAULT_TENANT:
                logger.info(
                    f"No {provider.label} account for tenant, using default",
                    extra={"provider": provider.value, "tenant_id": tenant_id},
                )
            return default

        logger.warning(
            f"Account table has no default {provider.label} entry, using fallback",
            extra={"provider": provider.value, "tenant_id": tenant_id},
        )
        return FALLBACK_ACCOUNTS[provider]


def build_account_mapper() -> AccountMapper:
    """Static table, or the JSON file named by ``account_mapping_file``."""
    if settings.account_mapping_file:
        return AccountMapper(load_account_table(settings.account_mapping_file))
    return AccountMapper()
