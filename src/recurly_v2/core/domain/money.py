"""Importes multi-moneda.

Los campos `*_in_cents` de planes y add-ons llevan un importe por moneda:
`<unit_amount_in_cents><USD type="integer">7900</USD></unit_amount_in_cents>`.
"""

from __future__ import annotations

from typing import Any, Iterator

from pydantic import RootModel, model_validator

from recurly_v2.core import config


class Money(RootModel[dict[str, int]]):
    """An amount in cents for one or more currencies.

    A bare integer is assigned to the current default currency.
    """

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Money amounts must be integers")
        if isinstance(value, int):
            return {config.default_currency(): value}
        return value

    @property
    def currencies(self) -> list[str]:
        return list(self.root)

    def amount(self, currency: str | None = None) -> int:
        if currency is not None:
            return self.root[currency]
        if len(self.root) != 1:
            raise ValueError(f"Money has {len(self.root)} currencies; pass one of {self.currencies}")
        return next(iter(self.root.values()))

    def __getitem__(self, currency: str) -> int:
        return self.root[currency]

    def __setitem__(self, currency: str, cents: int) -> None:
        self.root[currency] = int(cents)

    def __delitem__(self, currency: str) -> None:
        del self.root[currency]

    def __contains__(self, currency: object) -> bool:
        return currency in self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)
