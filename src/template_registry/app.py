"""Registry version check application."""

from collections.abc import Iterable
from uuid import uuid4

from .adapters.registry_source import (
    CachedRegistrySource,
    CacheOnlyRegistrySource,
    FileRegistrySource,
    HttpRegistrySource,
    RegistrySource,
)
from .cache.registry_cache import RegistryCache
from .config import RegistryConfig
from .diff import evaluate, removed_identifiers
from .logging import LoggingContextManager, RegistryLogger, create_registry_logger
from .scanner import scan_template_dir
from .types import BumpCategory, DiffResult, RegistrySnapshot
from .validation import RegistryValidator

# Distinguishes "not supplied" from an explicit None (nothing published)
_UNSET = object()


class RegistryApp:
    """Wires registry sources and the template scan to the diff evaluator."""

    def __init__(
        self,
        config: RegistryConfig | None = None,
        logger: RegistryLogger | None = None,
        source: RegistrySource | None = None,
    ):
        """Initialize the app.

        Args:
            config: Settings (defaults used when omitted)
            logger: Structured logger; one is created from config when omitted
            source: Registry source override; built from config when omitted
        """
        self.config = config or RegistryConfig()
        self.logger = logger or create_registry_logger(
            run_id=uuid4(), log_level=self.config.log_level
        )
        self.cache = RegistryCache(self.config.cache_dir, self.config.cache_ttl)
        self.validator = RegistryValidator(schema_dir=self.config.schema_dir)
        self.source = source or self._create_source()

    def _create_source(self) -> RegistrySource:
        """Registry file wins; otherwise the URL through the cache, or the cache alone offline."""
        if self.config.registry_file is not None:
            return FileRegistrySource(
                self.config.registry_file, logger=self.logger, validator=self.validator
            )

        if self.config.offline:
            return CacheOnlyRegistrySource(self.config.registry_url, self.cache, logger=self.logger)

        http_source = HttpRegistrySource(
            self.config.registry_url,
            timeout=self.config.timeout_seconds,
            logger=self.logger,
            validator=self.validator,
        )
        return CachedRegistrySource(http_source, self.cache, logger=self.logger)

    def load_previous(self) -> RegistrySnapshot | None:
        """Last published snapshot, or None if nothing was published yet."""
        with LoggingContextManager(self.logger, "load_previous", source=self.source.location):
            return self.source.fetch()

    def scan_local(self) -> list[str]:
        """Template ids found in the configured templates directory."""
        identifiers = scan_template_dir(self.config.templates_dir)
        self.logger.scan_completed(self.config.templates_dir, len(identifiers))
        return identifiers

    def evaluate(
        self,
        previous: RegistrySnapshot | None = _UNSET,
        local_identifiers: Iterable[str] | None = None,
        category: BumpCategory | str | None = None,
    ) -> DiffResult:
        """Decide the next registry version.

        Inputs not supplied are loaded from the configured source and
        templates directory.
        """
        if previous is _UNSET:
            previous = self.load_previous()
        if local_identifiers is None:
            local_identifiers = self.scan_local()
        else:
            local_identifiers = list(local_identifiers)

        result = evaluate(previous, local_identifiers, category or self.config.bump_part)

        self.logger.diff_evaluated(
            result.base_version,
            result.next_version,
            len(result.new_identifiers),
            len(removed_identifiers(previous, local_identifiers)),
        )
        return result
