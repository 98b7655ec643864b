import enum


class DeploymentEnvironment(enum.Enum):
    Production = "production"
    Development = "development"
    Staging = "staging"
    Test = "test"
    Local = "local"


class SyncErrorKind(enum.Enum):
    LinkNotFound = "link_not_found"
    AuthRequired = "auth_required"
    ExportFailed = "export_failed"
    StoreWriteFailed = "store_write_failed"
