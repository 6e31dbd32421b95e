"""
JSON Schema Contract Validators

Модуль для валидации конфигурации арифметического адаптера, заданной
plain-mapping'ом (например, распарсенным JSON/YAML), против формального
JSON Schema контракта. Использует библиотеку jsonschema.

Схемы:
- math_adapter.json (rounding_strategy, backends)
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping

import jsonschema
from jsonschema import Draft202012Validator

from src.core.errors import ConfigurationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
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
            schema_name: Имя схемы без расширения (например, 'math_adapter')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

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

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ConfigurationError: Если данные не соответствуют схеме
                (исходная jsonschema.ValidationError в __cause__)
        """
        try:
            self.validator.validate(data)
        except jsonschema.ValidationError as e:
            location = "/".join(str(part) for part in e.absolute_path) or "<root>"
            raise ConfigurationError(
                f"Invalid {self.schema_name} configuration at {location}: {e.message}"
            ) from e

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Mapping[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class MathAdapterConfigValidator(ContractValidator):
    """Валидатор для контракта конфигурации MathAdapter."""

    def __init__(self):
        super().__init__("math_adapter")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_math_adapter_config(data: Mapping[str, Any]) -> None:
    """
    Валидация конфигурации MathAdapter.

    Raises:
        ConfigurationError: Если данные не соответствуют схеме
    """
    MathAdapterConfigValidator().validate(data)
