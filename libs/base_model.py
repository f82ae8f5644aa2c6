import pydantic


class APIBaseModel(pydantic.BaseModel):
    """Base model for JSON report output."""

    model_config = pydantic.ConfigDict(
        extra="ignore",
        # JSON has no representation of inf or nan, write them as null.
        ser_json_inf_nan="null",
    )
