"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, localstore.toml only contains
overrides.  A fresh store needs no config file at all.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

# --- localstore.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    dir_name: str = ".localstore"
    db_name: str = "localstore.db"


class ProductConfig(BaseModel):
    """One entry of ``[[cart.products]]``."""

    model_config = {"frozen": True}

    id: int
    name: str
    unit_price: Decimal = Field(ge=0)
    stock: int = Field(ge=0)


DEFAULT_PRODUCTS: tuple[ProductConfig, ...] = (
    ProductConfig(id=1, name="Notebook", unit_price=Decimal("2500.00"), stock=10),
    ProductConfig(id=2, name="Mouse", unit_price=Decimal("50.00"), stock=50),
    ProductConfig(id=3, name="Teclado", unit_price=Decimal("150.00"), stock=30),
    ProductConfig(id=4, name="Monitor", unit_price=Decimal("800.00"), stock=15),
    ProductConfig(id=5, name="Webcam", unit_price=Decimal("200.00"), stock=25),
    ProductConfig(id=6, name="Headset", unit_price=Decimal("120.00"), stock=40),
)


class CartConfig(BaseModel):
    """[cart] section."""

    model_config = {"frozen": True}

    currency: str = "R$"
    default_discount_percent: Decimal = Field(default=Decimal("10"), ge=0, le=100)
    products: list[ProductConfig] = Field(default_factory=lambda: list(DEFAULT_PRODUCTS))


class AccountConfig(BaseModel):
    """One entry of ``[[login.accounts]]``."""

    model_config = {"frozen": True}

    email: str
    password: str


class LoginConfig(BaseModel):
    """[login] section."""

    model_config = {"frozen": True}

    min_password_length: int = 8
    accounts: list[AccountConfig] = Field(
        default_factory=lambda: [
            AccountConfig(email="ana@gmail.com", password="Ana12345"),
            AccountConfig(email="francisco@gmail.com", password="Fran9876"),
            AccountConfig(email="murilo@gmail.com", password="Muri5432"),
        ]
    )


class PasswordConfig(BaseModel):
    """[password] section."""

    model_config = {"frozen": True}

    min_length: int = 8
    require_digit: bool = True
    require_special: bool = True
    require_uppercase: bool = True
    special_characters: str = "!@#$%&*()-_+={}[]|:;<>,.?/"
