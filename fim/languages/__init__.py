"""Language configurations. Importing this package registers all languages."""

from fim.languages import (  # noqa: F401
    _c,
    _go,
    _java,
    _javascript,
    _python,
    _rust,
)
