"""Home gateway client.

Wires the SmartThings gateway, registries, command pipeline, actions,
providers and background polling into a single object the agent
runtime (or the HTTP app) talks to.
"""

from __future__ import annotations

import logging
from typing import Any

from home_gateway.config.environment import SettingGetter, load_device_aliases, validate_home_config
from home_gateway.core.errors import ConfigValidationFailed
from home_gateway.core.interfaces.gateway import DeviceGateway
from home_gateway.core.interfaces.runtime import CompletionOracle, IntentOracle, MemoryStore
from home_gateway.core.models.command import CommandResult
from home_gateway.models import Config
from home_gateway.services.actions import ActionRegistry, ControlDeviceAction, DiscoverDevicesAction
from home_gateway.services.capability_registry import CapabilityRegistry
from home_gateway.services.entity_registry import EntityRegistry
from home_gateway.services.llm_oracle import LLMOracle
from home_gateway.services.memory import InMemoryMemoryStore, build_command_memory
from home_gateway.services.orchestrator import CommandOrchestrator
from home_gateway.services.polling import PollingLoop
from home_gateway.services.providers import (
    AutomationStateProvider,
    CachedStateProvider,
    DeviceStateProvider,
    ProviderRegistry,
)
from home_gateway.services.smartthings_api import SmartThingsApi
from home_gateway.services.state_cache import StateCache
from home_gateway.services.target_resolver import TargetResolver

logger = logging.getLogger(__name__)

DEFAULT_AGENT_ID = "home-gateway"


class HomeClient:
    """Entry point for device control and state queries.

    Usage:
        client = HomeClient(Config())
        await client.initialize()
        result = await client.handle_command("turn off the fan", "user-1")
        await client.stop()
    """

    def __init__(
        self,
        config: Config,
        get_setting: SettingGetter | None = None,
        gateway: DeviceGateway | None = None,
        intent_oracle: IntentOracle | None = None,
        completion_oracle: CompletionOracle | None = None,
        memory_store: MemoryStore | None = None,
        agent_id: str = DEFAULT_AGENT_ID,
    ) -> None:
        """Initialize client. Nothing is connected until initialize().

        Args:
            config: Application configuration
            get_setting: Runtime setting lookup (default: read from config)
            gateway: Device API gateway (default: SmartThingsApi)
            intent_oracle: Should-respond oracle (default: LLMOracle)
            completion_oracle: Completion oracle (default: LLMOracle)
            memory_store: Memory store (default: in-process store)
            agent_id: Agent id recorded on memory records
        """
        self.config = config
        self.get_setting = get_setting or self._setting_from_config
        self.agent_id = agent_id
        self.memory_store: MemoryStore = memory_store or InMemoryMemoryStore()

        self._gateway = gateway
        self._intent_oracle = intent_oracle
        self._completion_oracle = completion_oracle
        self._owned_clients: list[Any] = []

        self.capabilities = CapabilityRegistry()
        self.actions = ActionRegistry()
        self.providers = ProviderRegistry()
        self.state_cache = StateCache()
        self.entity_registry: EntityRegistry | None = None
        self.orchestrator: CommandOrchestrator | None = None
        self.polling: PollingLoop | None = None

    @property
    def initialized(self) -> bool:
        return self.orchestrator is not None

    def _setting_from_config(self, key: str) -> str | None:
        value = getattr(self.config, key.lower(), None)
        return str(value) if value else None

    async def initialize(self, start_polling: bool = True) -> None:
        """Validate configuration and build all components.

        Args:
            start_polling: Start the background refresh loop

        Raises:
            ConfigValidationFailed: If the SmartThings token is missing, or the
                LLM key is missing and no oracles were injected
        """
        home_config = validate_home_config(self.get_setting)
        needs_oracle = self._intent_oracle is None or self._completion_oracle is None
        if needs_oracle and not self.config.llm_api_key:
            raise ConfigValidationFailed(["LLM_API_KEY: required when no oracles are provided"])

        if self._gateway is None:
            self._gateway = SmartThingsApi(
                token=home_config.SMARTTHINGS_TOKEN,
                base_url=self.config.smartthings_base_url,
                timeout=self.config.smartthings_timeout,
            )
            self._owned_clients.append(self._gateway)

        if needs_oracle:
            oracle = LLMOracle(
                api_key=self.config.llm_api_key,
                model=self.config.llm_model,
                base_url=self.config.llm_base_url,
                timeout=self.config.llm_timeout,
            )
            self._owned_clients.append(oracle)
            self._intent_oracle = self._intent_oracle or oracle
            self._completion_oracle = self._completion_oracle or oracle

        self.entity_registry = EntityRegistry(self._gateway)
        resolver = TargetResolver(
            aliases=load_device_aliases(self.config.device_aliases_path),
            threshold=self.config.target_match_threshold,
        )
        self.orchestrator = CommandOrchestrator(
            gateway=self._gateway,
            entity_registry=self.entity_registry,
            state_cache=self.state_cache,
            intent_oracle=self._intent_oracle,
            completion_oracle=self._completion_oracle,
            resolver=resolver,
            call_timeout=max(self.config.smartthings_timeout, self.config.llm_timeout),
        )

        self.actions.register(ControlDeviceAction(self.orchestrator))
        self.actions.register(DiscoverDevicesAction(self.entity_registry))

        self.providers.register(CachedStateProvider(self.state_cache))
        self.providers.register(DeviceStateProvider(self.entity_registry))
        self.providers.register(
            AutomationStateProvider(
                base_url=self.config.home_assistant_url,
                token=self.config.home_assistant_token,
                timeout=self.config.home_assistant_timeout,
            )
        )

        self.polling = PollingLoop(
            self.entity_registry,
            self.state_cache,
            interval=self.config.poll_interval,
        )
        if start_polling:
            self.polling.start()

        logger.info(
            f"SmartThings client initialized: {len(self.actions)} actions, "
            f"{len(self.providers)} providers, {len(self.capabilities)} capabilities"
        )

    async def handle_command(
        self,
        command: str,
        user_id: str,
        device_id: str | None = None,
    ) -> CommandResult | None:
        """Record the command in memory and run it through the pipeline.

        The memory write is best effort: a failing store is logged and the
        command still runs.

        Returns:
            CommandResult, or None when the intent oracle declined

        Raises:
            RuntimeError: If initialize() has not been called
            HomeGatewayError: Any pipeline failure
        """
        if self.orchestrator is None:
            raise RuntimeError("HomeClient is not initialized")

        record = build_command_memory(command, user_id, self.agent_id)
        try:
            await self.memory_store.create_memory(record.to_record())
        except Exception as e:
            logger.warning(f"Failed to store command memory {record.id}: {e}. Continuing without it.")

        return await self.orchestrator.handle_command(command, user_id, device_id=device_id)

    async def stop(self) -> None:
        """Stop polling and close HTTP clients created by this client."""
        if self.polling is not None:
            await self.polling.stop()
        for owned in self._owned_clients:
            await owned.close()
        self._owned_clients.clear()
        logger.info("SmartThings client stopped")
