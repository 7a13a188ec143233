MANAGED_LABEL_SELECTOR = "genet.io/managed=true"
USER_NAMESPACE_PREFIX = "user-"

EXPIRES_AT_ANNOTATION = "genet.io/expires-at"
PROTECTED_UNTIL_ANNOTATION = "genet.io/protected-until"

DEFAULT_CONFIG_PATH = "/etc/genet/config.yaml"
