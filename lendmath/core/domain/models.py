"""
Kink, Debt — входные модели процентных расчётов

Immutable Pydantic модели (frozen=True). Живут ровно один вызов:
ядро их не хранит и не изменяет.
"""

from pydantic import BaseModel, Field


class Kink(BaseModel):
    """
    Точка излома кусочно-линейной кривой ставки.

    util — utilization (в той шкале, в какой её задаёт пул: доля или %),
    rate — ставка в этой точке. Повтор util у соседних точек означает
    вертикальный скачок ставки.
    """

    util: float = Field(..., allow_inf_nan=False, description="Utilization в точке излома")
    rate: float = Field(..., ge=0, allow_inf_nan=False, description="Ставка в точке излома")

    model_config = {"frozen": True}


class Debt(BaseModel):
    """
    Один долг для средневзвешенной ставки.

    Принимает и snake_case, и camelCase поля (debtUSD/interestRate),
    как они приходят из внешнего слоя.
    """

    debt_usd: float = Field(
        ..., ge=0, allow_inf_nan=False, alias="debtUSD", description="Размер долга в USD"
    )
    interest_rate: float = Field(
        ..., allow_inf_nan=False, alias="interestRate", description="Ставка по долгу"
    )

    model_config = {"frozen": True, "populate_by_name": True}
