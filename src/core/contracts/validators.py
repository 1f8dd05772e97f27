"""
Contract Validators — JSON Schema проверки спецификаций и кандидатов

Сырые dict на границе библиотеки проверяются по схемам из
contracts/schema/ (jsonschema, Draft 2020-12):

- object_spec.json: конфигурация тела, проверяется до построения ObjectSpec
- solution_candidate.json: dict из SolutionCandidate.to_contract()

Схемы парсятся и мета-валидируются один раз на процесс; валидатор
разделяется по имени схемы.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.domain.object_spec import ObjectSpec

# contracts/schema/ в корне проекта (src/core/contracts -> root)
SCHEMA_DIR: Path = Path(__file__).resolve().parents[3] / "contracts" / "schema"

OBJECT_SPEC_SCHEMA = "object_spec"
SOLUTION_CANDIDATE_SCHEMA = "solution_candidate"


# =============================================================================
# ЗАГРУЗКА СХЕМ
# =============================================================================


class SchemaLoader:
    """Читает схемы контрактов из директории и кэширует распарсенные."""

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        if not schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {schema_dir}")
        self._schema_dir = schema_dir
        self._cache: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Распарсенная схема `schema_name` (имя файла без .json).

        Raises:
            FileNotFoundError: Файл схемы не найден
            json.JSONDecodeError: Файл не является JSON
            ValueError: Файл не является валидной Draft 2020-12 схемой
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"{path.name} is not a valid Draft 2020-12 schema: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


@lru_cache(maxsize=None)
def _default_loader() -> SchemaLoader:
    return SchemaLoader()


@lru_cache(maxsize=None)
def _compiled(schema_name: str) -> Draft202012Validator:
    return Draft202012Validator(_default_loader().load_schema(schema_name))


# =============================================================================
# ВАЛИДАТОРЫ
# =============================================================================


class ContractValidator:
    """Проверяет dict по одной именованной схеме контракта."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.validator = _compiled(schema_name)

    @property
    def schema(self) -> Dict[str, Any]:
        return self.validator.schema

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Первое найденное нарушение
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """
        Все нарушения в виде "path: message", упорядоченные по path.

        Корень документа обозначается "$".
        """
        messages = []
        for error in sorted(self.iter_errors(data), key=lambda e: list(map(str, e.absolute_path))):
            path = ".".join(str(p) for p in error.absolute_path) or "$"
            messages.append(f"{path}: {error.message}")
        return messages


class ObjectSpecValidator(ContractValidator):
    def __init__(self):
        super().__init__(OBJECT_SPEC_SCHEMA)


class SolutionCandidateValidator(ContractValidator):
    def __init__(self):
        super().__init__(SOLUTION_CANDIDATE_SCHEMA)


# =============================================================================
# ТОЧКИ ВХОДА
# =============================================================================


def validate_object_spec(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Сырая конфигурация тела нарушает контракт
    """
    ObjectSpecValidator().validate(data)


def validate_solution_candidate(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: dict из SolutionCandidate.to_contract() нарушает
            контракт
    """
    SolutionCandidateValidator().validate(data)


def load_object_spec(data: Dict[str, Any]) -> ObjectSpec:
    """
    Проверка сырой конфигурации по контракту, затем построение ObjectSpec.

    Схема ловит ошибки структуры и типов; модель добавляет межполевые
    правила (порядок осей, заполнение плотнее тела).

    Raises:
        ValidationError: Нарушение контракта (jsonschema)
        pydantic.ValidationError: Нарушено межполевое правило
    """
    validate_object_spec(data)
    return ObjectSpec.model_validate(data)


__all__ = [
    "SCHEMA_DIR",
    "SchemaLoader",
    "ContractValidator",
    "ObjectSpecValidator",
    "SolutionCandidateValidator",
    "ValidationError",
    "validate_object_spec",
    "validate_solution_candidate",
    "load_object_spec",
]
