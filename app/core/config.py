from decimal import Decimal

from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from the process + optionally from a local .env
    model_config = SettingsConfigDict(
        env_file=(".env",),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="siteledger", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))
    LOG_FILE: str = Field(default="", validation_alias=AliasChoices("LOG_FILE", "log_file"))

    # GST defaults (percent)
    DEFAULT_CGST_RATE: Decimal = Field(default=Decimal("9"), validation_alias=AliasChoices("DEFAULT_CGST_RATE", "default_cgst_rate"))
    DEFAULT_SGST_RATE: Decimal = Field(default=Decimal("9"), validation_alias=AliasChoices("DEFAULT_SGST_RATE", "default_sgst_rate"))

    # Contractor letterhead printed on invoices
    CONTRACTOR_NAME: str = Field(default="ABHIMANYU TILING WORKS", validation_alias=AliasChoices("CONTRACTOR_NAME", "contractor_name"))
    CONTRACTOR_TAGLINE: str = Field(default="Premium Tiling & Flooring Solutions", validation_alias=AliasChoices("CONTRACTOR_TAGLINE", "contractor_tagline"))
    CONTRACTOR_GSTIN: str = Field(default="", validation_alias=AliasChoices("CONTRACTOR_GSTIN", "contractor_gstin"))
    CONTRACTOR_PAN: str = Field(default="", validation_alias=AliasChoices("CONTRACTOR_PAN", "contractor_pan"))
    CONTRACTOR_PHONE: str = Field(default="", validation_alias=AliasChoices("CONTRACTOR_PHONE", "contractor_phone"))
    CONTRACTOR_EMAIL: str = Field(default="", validation_alias=AliasChoices("CONTRACTOR_EMAIL", "contractor_email"))
    INVOICE_JURISDICTION: str = Field(default="Mumbai", validation_alias=AliasChoices("INVOICE_JURISDICTION", "invoice_jurisdiction"))

    # Invoice numbering (PI-0001, TI-0001)
    PROFORMA_PREFIX: str = Field(default="PI", validation_alias=AliasChoices("PROFORMA_PREFIX", "proforma_prefix"))
    TAX_INVOICE_PREFIX: str = Field(default="TI", validation_alias=AliasChoices("TAX_INVOICE_PREFIX", "tax_invoice_prefix"))


settings = Settings()
