from typing import Literal

from pydantic import BaseModel, Field, model_validator

from astra.schemas.command import Command

IntentMode = Literal["direct", "vague", "unknown"]


class IntentContext(BaseModel):
    current_pages: list[str] = Field(default_factory=list)
    app_name: str | None = None

    model_config = {"frozen": True}


class IntentSuggestion(BaseModel):
    label: str
    command: str
    description: str | None = None


class IntentResult(BaseModel):
    mode: IntentMode
    commands: list[Command] = Field(default_factory=list)
    message: str | None = None
    suggestions: list[IntentSuggestion] | None = None

    @model_validator(mode="after")
    def check_mode_payload(self) -> "IntentResult":
        if self.mode == "direct":
            if not self.commands:
                raise ValueError("direct intent requires at least one command")
            if self.suggestions:
                raise ValueError("direct intent must not carry suggestions")
        elif self.commands:
            raise ValueError(f"{self.mode} intent must not carry commands")
        return self


class IntentRequest(BaseModel):
    text: str
    current_pages: list[str] = Field(default_factory=list)
    app_name: str | None = None
