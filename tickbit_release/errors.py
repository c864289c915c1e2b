class ReleaseError(Exception):
    """Base exception for the Tickbit release tooling"""
    pass


class ConfigError(ReleaseError):
    """Bad or incomplete network/compiler configuration"""
    pass


class ArtifactError(ReleaseError):
    """Compiled contract artifact missing or unusable"""
    pass


class DeploymentError(ReleaseError):
    """RPC connection failure or rejected deployment"""
    pass


class AddressPatternError(ReleaseError):
    """Expected address site not found in a file"""
    def __init__(self, message: str, path=None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
