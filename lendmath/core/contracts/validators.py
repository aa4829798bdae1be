"""
JSON Schema Contract Validators

Модуль для валидации конфигурации пулов, приходящей извне в виде JSON,
до того как она попадёт в ядро. Использует библиотеку jsonschema.

Схемы:
- interest_curve.json (кривая ставки пула: pool_id + kinks)
- debt_positions.json (долги аккаунта для средневзвешенной ставки)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator

from lendmath.core.domain.models import Debt, Kink

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в пакете, в contracts/schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'interest_curve')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        logger.debug("Loaded contract schema %s from %s", schema_name, schema_path)
        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации (ValidationError)."""
        return self.validator.iter_errors(data)


class InterestCurveValidator(ContractValidator):
    """Валидатор для interest_curve контракта."""

    def __init__(self):
        super().__init__("interest_curve")


class DebtPositionsValidator(ContractValidator):
    """Валидатор для debt_positions контракта."""

    def __init__(self):
        super().__init__("debt_positions")


# Валидаторы контрактов ядра, создаются один раз при импорте
_INTEREST_CURVE_VALIDATOR = InterestCurveValidator()
_DEBT_POSITIONS_VALIDATOR = DebtPositionsValidator()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_interest_curve(data: Dict[str, Any]) -> None:
    """
    Валидация interest_curve данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    _INTEREST_CURVE_VALIDATOR.validate(data)


def validate_debt_positions(data: Dict[str, Any]) -> None:
    """
    Валидация debt_positions данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    _DEBT_POSITIONS_VALIDATOR.validate(data)


def load_kinks(data: Dict[str, Any]) -> List[Kink]:
    """
    Точки кривой из interest_curve документа.

    Документ сначала проверяется по схеме, затем каждая точка
    превращается в Kink (порядок документа сохраняется).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    validate_interest_curve(data)
    return [Kink.model_validate(k) for k in data["kinks"]]


def load_debts(data: Dict[str, Any]) -> List[Debt]:
    """
    Долги из debt_positions документа (после проверки по схеме).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    validate_debt_positions(data)
    return [Debt.model_validate(d) for d in data["debts"]]
