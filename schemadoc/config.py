"""Configuração da aplicação."""
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional


def _env_list(name: str, default: List[str]) -> List[str]:
    """Lê lista separada por vírgulas de uma variável de ambiente."""
    value = os.getenv(name)
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class RenderConfig:
    """Configuração da renderização das tabelas de tipos."""

    strip_namespaces: List[str] = field(default_factory=list)
    request_context_types: List[str] = field(
        default_factory=lambda: ["Request", "HttpRequest", "PreparedRequest", "Conn"]
    )
    type_labels: Dict[str, str] = field(default_factory=dict)
    documented_actions: List[str] = field(default_factory=lambda: ["create", "update", "process"])

    @classmethod
    def from_env(cls) -> "RenderConfig":
        """Carrega config de variáveis de ambiente."""
        defaults = cls()
        return cls(
            strip_namespaces=_env_list("SCHEMADOC_STRIP_NAMESPACES", defaults.strip_namespaces),
            request_context_types=_env_list(
                "SCHEMADOC_REQUEST_CONTEXT_TYPES", defaults.request_context_types
            ),
            documented_actions=_env_list("SCHEMADOC_DOCUMENTED_ACTIONS", defaults.documented_actions),
        )


@dataclass
class AppConfig:
    """Configuração da aplicação."""

    output_path: str = "doc/API.md"
    routes_as_titles: bool = False
    titles: Dict[str, str] = field(default_factory=dict)  # módulo de teste -> título do grupo
    render: Optional[RenderConfig] = None

    def __post_init__(self):
        """Inicializa valores padrão."""
        if self.render is None:
            self.render = RenderConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Carrega config de variáveis de ambiente."""
        return cls(
            output_path=os.getenv("SCHEMADOC_OUTPUT", "doc/API.md"),
            routes_as_titles=os.getenv("SCHEMADOC_ROUTES_AS_TITLES", "").lower() in ("1", "true", "yes"),
            render=RenderConfig.from_env(),
        )


# Instância global
app_config = AppConfig.from_env()
