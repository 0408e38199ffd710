"""Base class for comparison pipeline steps.

Every step declares typed Input, Output and Config pydantic models, so the
orchestrator can wire steps together and the schemas can be introspected
without running anything.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


def elapsed_ms(start: float) -> int:
    """Milliseconds since ``start`` (a ``time.perf_counter()`` reading), rounded."""
    return round((time.perf_counter() - start) * 1000)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Abstract base for pipeline steps.

    Subclasses set ``input_type``, ``output_type`` and ``config_type`` and
    implement ``run()`` and ``validate_inputs()``. Steps hold no per-run
    state, so one instance may execute several inputs, including from
    different threads.
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]

    def __init__(self, config: ConfigT | None = None):
        self.config = config if config is not None else self.config_type()

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        """Execute this step. Returns output model."""
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> bool:
        """Check that all required input artifacts exist."""
        ...

    def execute(self, inputs: InputT) -> OutputT:
        """Run with validation, logging and timing."""
        step_name = self.name or self.__class__.__name__

        if not self.validate_inputs(inputs):
            raise ValueError(f"[{step_name}] Input validation failed")

        logger.debug(f"[{step_name}] Starting...")
        t0 = time.perf_counter()
        result = self.run(inputs)
        elapsed = time.perf_counter() - t0
        logger.info(f"[{step_name}] Done in {elapsed:.2f}s")
        return result

    @classmethod
    def get_input_schema(cls) -> dict:
        return cls.input_type.model_json_schema()

    @classmethod
    def get_output_schema(cls) -> dict:
        return cls.output_type.model_json_schema()

    @classmethod
    def get_config_schema(cls) -> dict:
        return cls.config_type.model_json_schema()
