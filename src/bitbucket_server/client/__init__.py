#


class BitbucketException(Exception):
    def __init__(self, msg: str) -> None:
        super().__init__(msg)


class EndpointConfigError(BitbucketException):
    def __init__(self) -> None:
        super().__init__("Bitbucket endpoint is not configured. Set bitbucket_endpoint or pass endpoint explicitly.")


class AuthenticationConfigError(BitbucketException):
    def __init__(self) -> None:
        super().__init__(
            "Incomplete authentication configured. "
            "Provide either bitbucket_token or both bitbucket_username and bitbucket_password."
        )


class ResponseDecodeError(BitbucketException):
    """Raised when a successful response body does not match the expected model."""

    def __init__(self, model: str, status: int) -> None:
        self.model = model
        self.status = status
        super().__init__(f"Failed to decode {model} from response with status {status}")
