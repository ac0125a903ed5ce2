"""minivc error types."""


class InvalidVersion(Exception):
    """Raised when a commit version would rewrite history.

    Versions only ever increase. A version that is not positive, or not
    strictly greater than the latest committed version, is rejected
    before the tree is touched.

    Attributes:
        version: The rejected version.
        latest: The latest version committed at the time.
    """

    def __init__(self, version: int, latest: int) -> None:
        self.version = version
        self.latest = latest
        super().__init__(
            f"Invalid version {version}: must be > {max(latest, 0)}"
        )


class CorruptArtifact(Exception):
    """Raised when a stored commit artifact cannot be decoded.

    Attributes:
        name: The artifact name (e.g. ``commit_3.txt``), if known.
    """

    def __init__(self, name: str | None, reason: str = "") -> None:
        self.name = name
        self.reason = reason
        label = name if name is not None else "<unnamed>"
        msg = f"Corrupt artifact {label}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
