"""
Base generator interfaces.

Defines the contract file generators implement, and the capability set
that declaration sub-generators expose to the file generator.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Set, Any, Optional
from pathlib import Path

from .config import GeneratorConfig
from .printer import Printer
from .templates import TemplateEngine, create_template_engine
from ...logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """A file could not be turned into Lisp source."""

    pass


class UnknownSyntaxError(GeneratorError):
    """A file reached the generator with a syntax it cannot map.

    The descriptor front end only ever hands over proto2 or proto3 files,
    so this means the input tree is broken, not that the user erred.
    """

    def __init__(self, file_name: str, syntax: Any):
        self.file_name = file_name
        self.syntax = syntax
        super().__init__(f"Unknown syntax for file {file_name}: {syntax}")


# Declaration capabilities


class DeclarationGenerator(ABC):
    """Renders one declaration and reports the symbols it introduces."""

    @abstractmethod
    def generate(self, printer: Printer) -> None:
        """Write the full declaration to the printer."""

    @abstractmethod
    def add_exports(self, exports: List[str]) -> None:
        """Append every symbol this declaration puts in the primary package."""


class PackageContributor(ABC):
    """Declarations that reference packages the file must declare first."""

    @abstractmethod
    def add_packages(self, packages: Set[str]) -> None:
        """Insert the Lisp packages this declaration refers to."""


class RpcExporter(ABC):
    """Declarations with symbols that live in the RPC package."""

    @abstractmethod
    def add_rpc_exports(self, rpc_exports: List[str]) -> None:
        """Append the symbols destined for the RPC package."""


# File generators


class CodeGenerator(ABC):
    """Abstract base class for file-level generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language."""
        pass

    @property
    def file_extension(self) -> str:
        """Return the file extension for generated files."""
        return self.config.file_extension

    def get_template_directory(self) -> Optional[Path]:
        """Directory of this generator's .j2 files, or None for in-memory only."""
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def create_printer(self, sink=None) -> Printer:
        """A printer sharing this generator's templates and indentation."""
        return Printer(sink, self.config.indent_size, self.template_engine)

    @abstractmethod
    def generate(self, printer: Printer) -> None:
        """Write the complete output file to the printer."""
        pass

    def generate_source(self) -> str:
        """Generate into a fresh in-memory printer and return the text."""
        printer = self.create_printer()
        self.generate(printer)
        return printer.getvalue()

    def describe(self) -> Dict[str, Any]:
        """Extra metadata for a GenerationResult."""
        return {}

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a named template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Generated source for one file, or the reason there is none."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Args:
            code: The complete Lisp source
            warnings: Non-fatal problems noticed while generating
            metadata: Language, extension and generator-specific counts
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """A failed result carrying no code."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator) -> GenerationResult:
    """
    Run a generator, turning generator failures into a failed result.

    Args:
        generator: Fully constructed file generator

    Returns:
        GenerationResult with code and metadata
    """
    try:
        code = generator.generate_source()
    except GeneratorError as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
    }
    metadata.update(generator.describe())
    return GenerationResult(code, metadata=metadata)
