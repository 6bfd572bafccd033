from pydantic import BaseModel, ConfigDict, model_validator


class Identity(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    email: str = ""
    name: str = ""

    @model_validator(mode="before")
    @classmethod
    def accept_uid(cls, data):
        # Records from older sessions may carry only "uid"
        if isinstance(data, dict) and not data.get("id") and data.get("uid"):
            data = {**data, "id": data["uid"]}
        return data

    @property
    def favorites_key(self) -> str:
        return f"favorites_{self.id}"


class Credentials(BaseModel):
    email: str = ""
    password: str = ""


class Registration(Credentials):
    name: str = ""
