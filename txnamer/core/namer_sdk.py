"""TransactionNamer singleton: configuration, agent setup and auto-instrumentation."""

from __future__ import annotations

import logging
import os

from ..agents import MonitoringAgent, OpenTelemetryAgent, create_agent
from .config import NamerConfig, NamerFileConfig, load_namer_config
from .listener import MonitoringRequestCycleListener
from .logger import LogLevel, configure_logger

logger = logging.getLogger(__name__)

_FALSE_VALUES = ("0", "false", "no", "off")


class TransactionNamer:
    """
    Main singleton wiring the request cycle listener into web frameworks.

    Instrumentations look the listener up through ``get_instance()`` on every
    request and do nothing until ``initialize()`` has built one.
    """

    _instance: TransactionNamer | None = None
    _initialized = False

    def __init__(self) -> None:
        self.config = NamerConfig()
        self.file_config: NamerFileConfig | None = None
        self.agent: MonitoringAgent | None = None
        self._listener: MonitoringRequestCycleListener | None = None

    @classmethod
    def get_instance(cls) -> TransactionNamer:
        """Get the singleton TransactionNamer instance."""
        if cls._instance is None:
            cls._instance = TransactionNamer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton. Patched frameworks stay patched but become no-ops."""
        cls._instance = None
        cls._initialized = False

    @property
    def listener(self) -> MonitoringRequestCycleListener | None:
        return self._listener

    @classmethod
    def initialize(
        cls,
        package_prefix: str | None = None,
        agent: str | MonitoringAgent | None = None,
        log_level: LogLevel = "info",
        auto_instrument: bool = True,
    ) -> TransactionNamer:
        """
        Initialize the transaction namer.

        Configuration precedence (highest to lowest):
        1. Initialization parameters (this function's arguments)
        2. Environment variables
        3. YAML configuration (.txnamer/config.yaml)
        4. Built-in defaults

        Args:
            package_prefix: Prefix stripped from page class names. Can also be set via TXNAMER_PACKAGE_PREFIX.
            agent: Agent name ("opentelemetry", "newrelic", "memory") or an agent instance.
                Can also be set via TXNAMER_AGENT. Default: opentelemetry
            log_level: Logging level (silent, error, warn, info, debug). Default: info
            auto_instrument: Patch Flask and Django when they are importable

        Returns:
            The initialized TransactionNamer instance
        """
        instance = cls.get_instance()

        # Configure logger FIRST (before any logging calls)
        configure_logger(log_level=log_level, prefix="TxNamer")

        if cls._initialized:
            logger.debug("Already initialized, skipping...")
            return instance

        instance.file_config = load_namer_config()
        instance.config = instance._resolve_config(package_prefix, agent)

        if not instance.config.enabled:
            logger.info("Transaction naming disabled via configuration")
            cls._initialized = True
            return instance

        instance.agent = instance._build_agent(agent)
        instance._listener = MonitoringRequestCycleListener(instance.config.package_prefix, instance.agent)
        logger.debug(f"Config: {instance.config}")

        if auto_instrument:
            instance._init_auto_instrumentations()

        cls._initialized = True
        logger.info(f"Transaction namer initialized with {instance.agent.name} agent")
        return instance

    def _resolve_config(self, package_prefix: str | None, agent: str | MonitoringAgent | None) -> NamerConfig:
        file_config = self.file_config or NamerFileConfig()
        config = NamerConfig()

        # Package prefix: init param > env var > config file
        if package_prefix is not None:
            config.package_prefix = package_prefix
        elif "TXNAMER_PACKAGE_PREFIX" in os.environ:
            config.package_prefix = os.environ["TXNAMER_PACKAGE_PREFIX"]
        elif file_config.naming and file_config.naming.package_prefix is not None:
            config.package_prefix = file_config.naming.package_prefix

        # Agent: init param > env var > config file
        if isinstance(agent, MonitoringAgent):
            config.agent = agent.name
        elif agent:
            config.agent = agent
        elif os.environ.get("TXNAMER_AGENT"):
            config.agent = os.environ["TXNAMER_AGENT"]
        elif file_config.agent and file_config.agent.name:
            config.agent = file_config.agent.name

        # Enabled: env var > config file
        env_enabled = os.environ.get("TXNAMER_ENABLED")
        if env_enabled is not None:
            config.enabled = env_enabled.strip().lower() not in _FALSE_VALUES
        elif file_config.instrumentation and file_config.instrumentation.enabled is not None:
            config.enabled = bool(file_config.instrumentation.enabled)

        instrumentation = file_config.instrumentation
        if instrumentation and instrumentation.component_parameter:
            config.component_parameter = instrumentation.component_parameter
        if instrumentation and instrumentation.ignored_view_prefixes is not None:
            config.ignored_view_prefixes = tuple(instrumentation.ignored_view_prefixes)

        return config

    def _build_agent(self, agent: str | MonitoringAgent | None) -> MonitoringAgent:
        if isinstance(agent, MonitoringAgent):
            return agent
        try:
            return create_agent(self.config.agent)
        except (ValueError, ImportError) as e:
            logger.error(f"Failed to create agent '{self.config.agent}', falling back to opentelemetry: {e}")
            self.config.agent = "opentelemetry"
            return OpenTelemetryAgent()

    def _init_auto_instrumentations(self) -> None:
        """Auto-detect and initialize framework instrumentations."""
        try:
            import flask  # pyright: ignore[reportUnusedImport]

            from ..instrumentation.flask import FlaskInstrumentation

            _ = FlaskInstrumentation()
            logger.info("initialized flask instrumentation")
        except ImportError:
            logger.debug("flask not installed, skipping flask instrumentation")

        try:
            import django  # pyright: ignore[reportUnusedImport]

            from ..instrumentation.django import DjangoInstrumentation

            _ = DjangoInstrumentation()
            logger.info("initialized django instrumentation")
        except ImportError:
            logger.debug("django not installed, skipping django instrumentation")
