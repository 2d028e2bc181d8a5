"""Statement templates and the data they are rendered with."""

from typing import Any, Dict, Optional

import jinja2
import numpy as np
from jinja2.sandbox import ImmutableSandboxedEnvironment

from dbbench.logging import init_logger

logger = init_logger(__name__)

MAX_INT63 = 2**63 - 1
_SEED_MASK = 2**64 - 1


class TemplateError(Exception):
    """Base class for errors raised while compiling or rendering templates."""


class TemplateSyntaxError(TemplateError):
    """The template source could not be parsed."""

    def __init__(self, name: str, message: str, lineno: Optional[int] = None):
        self.name = name
        self.lineno = lineno
        location = f"{name}:{lineno}" if lineno is not None else name
        super().__init__(f"failed to parse template {location}: {message}")


class TemplateRenderError(TemplateError):
    """Rendering failed, e.g. an undefined name or a failing function call."""

    def __init__(self, name: str, iteration: int, message: str):
        self.name = name
        self.iteration = iteration
        super().__init__(
            f"failed to execute template {name} at iteration {iteration}: {message}"
        )


class RandomSource:
    """
    Pseudorandom functions available to templates.

    Each worker owns one instance, so the generator state is never shared
    between concurrently running workers. Reseeding through ``seed`` only
    affects the owning worker.
    """

    def __init__(self, seed: Optional[Any] = None):
        self._generator = np.random.default_rng(seed)

    def seed(self, value: int) -> None:
        self._generator = np.random.default_rng(int(value) & _SEED_MASK)

    def int63(self) -> int:
        """A non-negative 63-bit integer."""
        return int(self._generator.integers(0, MAX_INT63, endpoint=True))

    def int63n(self, n: int) -> int:
        """An integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"invalid argument to RandInt63n: {n}, must be positive")
        return int(self._generator.integers(0, n))

    def float32(self) -> float:
        """A single precision float in [0, 1), carrying only its float32 digits."""
        value = self._generator.random(dtype=np.float32)
        return float(np.format_float_positional(value, unique=True))

    def float64(self) -> float:
        """A double precision float in [0, 1)."""
        return float(self._generator.random())

    def exp_float64(self) -> float:
        """An exponentially distributed float with rate 1."""
        return float(self._generator.standard_exponential())

    def norm_float64(self) -> float:
        """A standard normally distributed float."""
        return float(self._generator.standard_normal())


class IterationContext:
    """
    The names a template can reference while rendering one iteration.

    Args:
        iteration: 1-based index of the current iteration
        random_source: Generator owned by the rendering worker. A fresh,
            unseeded one is created when omitted.
    """

    def __init__(self, iteration: int, random_source: Optional[RandomSource] = None):
        self.iteration = iteration
        self.random_source = (
            random_source if random_source is not None else RandomSource()
        )

    def namespace(self) -> Dict[str, Any]:
        source = self.random_source
        return {
            "Iter": self.iteration,
            "Seed": source.seed,
            "RandInt63": source.int63,
            "RandInt63n": source.int63n,
            "RandFloat32": source.float32,
            "RandFloat64": source.float64,
            "RandExpFloat64": source.exp_float64,
            "RandNormFloat64": source.norm_float64,
        }


def _finalize(value):
    # Functions without a result, like Seed, render as nothing
    return "" if value is None else value


_environment = ImmutableSandboxedEnvironment(
    undefined=jinja2.StrictUndefined,
    finalize=_finalize,
    autoescape=False,
    keep_trailing_newline=True,
)


class StatementTemplate:
    """
    A compiled statement template.

    Compile once with :meth:`compile`, then render once per iteration.
    A compiled template is never mutated, so any number of workers may
    render it concurrently.
    """

    def __init__(self, name: str, template: jinja2.Template):
        self.name = name
        self._template = template

    @classmethod
    def compile(cls, text: str, name: str = "statement") -> "StatementTemplate":
        """
        Parse the template source.

        Raises:
            TemplateSyntaxError: If the source is not a valid template
        """
        try:
            template = _environment.from_string(text)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError(name, e.message or str(e), e.lineno) from e
        logger.debug(f"Compiled template {name}")
        return cls(name, template)

    def render(self, context: IterationContext) -> str:
        """
        Render the statement for one iteration.

        Raises:
            TemplateRenderError: If the template references an undefined name
                or a function it calls fails
        """
        try:
            return self._template.render(context.namespace())
        except Exception as e:
            raise TemplateRenderError(self.name, context.iteration, str(e)) from e
