from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    """An authenticated identity as reported by the identity provider.

    Returned by create-account and sign-in. The account id is the stable key
    for the user's profile record and for per-account rate limits.

    Attributes:
        account_id: Provider-assigned unique identifier.
        email: Email address the account signs in with.
    """

    model_config = ConfigDict(frozen=True)

    account_id: str = Field(min_length=1, description="Provider-assigned account identifier.")
    email: str = Field(description="Sign-in email address.")
