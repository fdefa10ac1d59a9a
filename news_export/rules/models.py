from typing import Literal

from pydantic import BaseModel, Field

from news_export.domain.entities import ExportSettings


class ExportDefaults(BaseModel):
    content_format: Literal["html", "markdown"] = "html"
    language: str = "en"


class DocumentDefaults(BaseModel):
    version: str = "1.7"
    generator_name: str = "news_export"
    generator_version: str = "0.1.0"


class ThemeRules(BaseModel):
    # Directory of <name>.yaml theme files; None keeps themes in memory
    directory: str | None = None
    used: str | None = None


class ExportRules(BaseModel):
    export: ExportDefaults = Field(default_factory=ExportDefaults)
    document: DocumentDefaults = Field(default_factory=DocumentDefaults)
    theme: ThemeRules = Field(default_factory=ThemeRules)

    def to_settings(self) -> ExportSettings:
        return ExportSettings(
            content_format=self.export.content_format,
            language=self.export.language,
            document_version=self.document.version,
            generator_name=self.document.generator_name,
            generator_version=self.document.generator_version,
        )
