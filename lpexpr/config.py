from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """Package-wide defaults. Mutate the module-level `settings` to change them."""

    model_config = ConfigDict(validate_assignment=True)

    line_size: int = Field(78, gt=0, description="Column budget of the LP text encoder")
    eps: float = Field(1e-7, ge=0, description="Tolerance for feasibility checks")
    rounding_eps: float = Field(1e-5, ge=0, description="Tolerance for rounding integer values")


settings = Settings()
