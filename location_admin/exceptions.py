"""
Custom application exceptions.
"""


class NotFoundError(LookupError):
    """A lookup-or-fail read found no matching row."""

    def __init__(self, resource: str, identifier):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class ContentEditVetoed(Exception):
    """Raised by a before-edit listener to refuse the edit."""

    def __init__(self, reason: str = "Editing this item is not allowed"):
        self.reason = reason
        super().__init__(reason)
