"""Configuration management for doxnorm."""

from pydantic import BaseModel, Field, field_validator

from ..parser.comment_models import ParserOptions

LANGUAGES = ("auto", "javascript", "python")
DOCSTRING_STYLES = ("auto", "google", "numpydoc", "rest", "epydoc")


class ParserConfig(BaseModel):
    """Configuration for the comment parsers."""

    raw: bool = Field(
        default=True, description="Keep descriptions exactly as written"
    )
    skip_single_star: bool = Field(
        default=True, description="Ignore /* */ blocks, only read /** */ blocks"
    )
    language: str = Field(
        default="auto", description="Source language, detected from extension"
    )
    docstring_style: str = Field(
        default="auto", description="Docstring style for Python sources"
    )

    @field_validator("language")
    @classmethod
    def validate_language(cls, language: str) -> str:
        """Validate the language is supported."""
        if language not in LANGUAGES:
            raise ValueError(
                f"Unsupported language '{language}', expected one of {LANGUAGES}"
            )
        return language

    @field_validator("docstring_style")
    @classmethod
    def validate_docstring_style(cls, style: str) -> str:
        """Validate the docstring style is supported."""
        if style not in DOCSTRING_STYLES:
            raise ValueError(
                f"Unsupported docstring style '{style}', "
                f"expected one of {DOCSTRING_STYLES}"
            )
        return style

    def to_options(self) -> ParserOptions:
        """Build the options passed to a parser call."""
        return ParserOptions(raw=self.raw, skip_single_star=self.skip_single_star)


class ExtractorConfig(BaseModel):
    """Configuration for file discovery and batch extraction."""

    include_patterns: list[str] = Field(
        default_factory=lambda: ["*.js", "*.mjs", "*.cjs", "*.jsx", "*.ts", "*.py"],
        description="Glob patterns of files to document",
    )
    exclude_patterns: list[str] = Field(
        default_factory=lambda: ["node_modules/*", "*.min.js", "test/*", "tests/*"],
        description="Glob patterns of files to skip",
    )
    max_workers: int = Field(
        default=4, ge=1, le=64, description="Threads used for batch extraction"
    )


class DoxnormConfig(BaseModel):
    """Complete configuration for doxnorm."""

    version: int = 1
    parser: ParserConfig = Field(default_factory=ParserConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)

    @classmethod
    def from_yaml(cls, file_path: str) -> "DoxnormConfig":
        """Load configuration from YAML file."""
        import yaml  # type: ignore[import-untyped]

        with open(file_path) as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))
