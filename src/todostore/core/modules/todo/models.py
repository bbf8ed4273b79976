import json
from datetime import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from todostore.errors import CorruptStateError


class Todo(BaseModel):
    """A short text item stored as one JSON file named by its id."""

    id: str  # Zero-padded sequential id, also the file name stem: 00001.txt
    text: str
    create_time: datetime | None = Field(default=None, alias="createTime")
    update_time: datetime | None = Field(default=None, alias="updateTime")  # Refreshed on every text update

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_file(self) -> str:
        """Serialize to the JSON stored on disk, using camelCase keys."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_file(cls, raw: str, todo_id: str) -> Self:
        """Parse the JSON content of the file named by todo_id.

        Raises CorruptStateError if the content is not a JSON object with a text field.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"Todo {todo_id} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise CorruptStateError(f"Todo {todo_id} is not a JSON object")

        # The file name is the authoritative id, older files may not mirror it
        data["id"] = todo_id
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise CorruptStateError(f"Todo {todo_id} has invalid content: {e}") from e
