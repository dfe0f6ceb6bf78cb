"""Field validation settings.

Length bounds for the fields collected by the registration and sign-in forms.
The character whitelists are fixed in code; only the bounds are tunable.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class ValidationSettings(BaseSettings):
    """Defines the length bounds applied by the field validators."""

    USERNAME_MIN_LENGTH: int = Field(gt=0, default=3)
    USERNAME_MAX_LENGTH: int = Field(gt=0, default=20)
    PASSWORD_MIN_LENGTH: int = Field(gt=0, default=8)
    PASSWORD_MAX_LENGTH: int = Field(gt=0, default=20)
    EMAIL_MIN_LENGTH: int = Field(gt=0, default=1)
    EMAIL_MAX_LENGTH: int = Field(gt=0, default=254)
    NAME_MIN_LENGTH: int = Field(gt=0, default=2)
    NAME_MAX_LENGTH: int = Field(gt=0, default=20)

    @model_validator(mode="after")
    def _check_bounds(self) -> "ValidationSettings":
        """Rejects any field whose minimum exceeds its maximum.

        Raises:
            ValueError: If a minimum length is greater than its maximum.
        """
        for field_name in ("USERNAME", "PASSWORD", "EMAIL", "NAME"):
            minimum = getattr(self, f"{field_name}_MIN_LENGTH")
            maximum = getattr(self, f"{field_name}_MAX_LENGTH")
            if minimum > maximum:
                raise ValueError(
                    f"{field_name}_MIN_LENGTH ({minimum}) exceeds "
                    f"{field_name}_MAX_LENGTH ({maximum})"
                )
        return self
