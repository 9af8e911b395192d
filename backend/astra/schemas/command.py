from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class CommandType(str, Enum):
    ADD_PAGE = "ADD_PAGE"
    RENAME_PAGE = "RENAME_PAGE"
    DELETE_PAGE = "DELETE_PAGE"


class AddPageCommand(BaseModel):
    type: Literal["ADD_PAGE"] = "ADD_PAGE"
    page_name: str

    model_config = {"frozen": True}


class RenamePageCommand(BaseModel):
    type: Literal["RENAME_PAGE"] = "RENAME_PAGE"
    old_name: str
    new_name: str

    model_config = {"frozen": True}


class DeletePageCommand(BaseModel):
    type: Literal["DELETE_PAGE"] = "DELETE_PAGE"
    page_name: str

    model_config = {"frozen": True}


Command = Annotated[
    Union[AddPageCommand, RenamePageCommand, DeletePageCommand],
    Field(discriminator="type"),
]

command_adapter: TypeAdapter[Command] = TypeAdapter(Command)
