"""Base domain exception."""


class DomainException(Exception):
    """
    Base exception for CredScore domain errors.

    Only boundary conditions raise: malformed requests and missing
    resources. Sparse or missing scoring data never does; the scoring
    engine has a numeric default for every such case.

    Attributes:
        message: Human-readable description, returned in the API error body
        code: Stable machine-readable error code
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)
