import logging
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from ..api import ApiClient
from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class BaseService:
    def __init__(self, api: ApiClient):
        self._api = api

    @staticmethod
    def _parse(model: Type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except SchemaError as e:
            logger.error("Unexpected %s payload: %s", model.__name__, e)
            raise ApiError(f"Malformed {model.__name__} received from server") from e

    @classmethod
    def _parse_list(cls, model: Type[M], data: Any) -> List[M]:
        return [cls._parse(model, item) for item in (data or [])]
