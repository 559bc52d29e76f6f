"""
Guild onboarding models and the project option transform.

The onboarding configuration is fetched as JSON, converted to the frozen
dataclasses below, and a modified copy is produced for every new project.
Fields the bot does not care about (prompt type, emoji, flags) are kept in
``extra`` so they survive the replace call unchanged.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .config import get_option_description


@dataclass(frozen=True)
class PromptOption:
    """A selectable option of an onboarding prompt."""
    title: str
    description: str = ""
    role_ids: Tuple[str, ...] = ()
    channel_ids: Tuple[str, ...] = ()
    id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PromptOption":
        known = {"id", "title", "description", "role_ids", "channel_ids"}
        return cls(
            title=data.get("title", ""),
            description=data.get("description") or "",
            role_ids=tuple(str(r) for r in data.get("role_ids") or ()),
            channel_ids=tuple(str(c) for c in data.get("channel_ids") or ()),
            id=str(data["id"]) if data.get("id") is not None else None,
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for key, value in self.extra.items():
            if key == "emoji":
                # The replace endpoint takes the emoji as flat fields
                if value:
                    payload["emoji_id"] = value.get("id")
                    payload["emoji_name"] = value.get("name")
                    payload["emoji_animated"] = value.get("animated", False)
                continue
            payload[key] = value
        if self.id is not None:
            payload["id"] = self.id
        payload["title"] = self.title
        payload["description"] = self.description
        payload["role_ids"] = list(self.role_ids)
        payload["channel_ids"] = list(self.channel_ids)
        return payload


@dataclass(frozen=True)
class OnboardingPrompt:
    """An onboarding question shown to new members."""
    title: str
    options: Tuple[PromptOption, ...] = ()
    id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OnboardingPrompt":
        known = {"id", "title", "options"}
        return cls(
            title=data.get("title", ""),
            options=tuple(PromptOption.from_dict(o) for o in data.get("options") or ()),
            id=str(data["id"]) if data.get("id") is not None else None,
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        if self.id is not None:
            payload["id"] = self.id
        payload["title"] = self.title
        payload["options"] = [option.to_dict() for option in self.options]
        return payload

    def with_option(self, option: PromptOption) -> "OnboardingPrompt":
        """Return a copy of this prompt with ``option`` appended."""
        return replace(self, options=self.options + (option,))


@dataclass(frozen=True)
class OnboardingConfig:
    """A guild's full onboarding configuration."""
    prompts: Tuple[OnboardingPrompt, ...] = ()
    default_channel_ids: Tuple[str, ...] = ()
    enabled: bool = False
    mode: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OnboardingConfig":
        return cls(
            prompts=tuple(OnboardingPrompt.from_dict(p) for p in data.get("prompts") or ()),
            default_channel_ids=tuple(str(c) for c in data.get("default_channel_ids") or ()),
            enabled=bool(data.get("enabled", False)),
            mode=int(data.get("mode") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Payload for the full onboarding replace call."""
        return {
            "prompts": [prompt.to_dict() for prompt in self.prompts],
            "default_channel_ids": list(self.default_channel_ids),
            "enabled": self.enabled,
            "mode": self.mode,
        }


@dataclass(frozen=True)
class OnboardingTargets:
    """Titles of the prompts that receive an option for each new project.

    An empty title disables that prompt.
    """
    role_prompt_title: str = ""
    visibility_prompt_title: str = ""

    def is_configured(self) -> bool:
        return bool(self.role_prompt_title or self.visibility_prompt_title)


@dataclass
class OnboardingChange:
    """Result of adding a project to an onboarding configuration."""
    config: OnboardingConfig
    updated_prompts: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.updated_prompts)


def add_project_options(
    config: OnboardingConfig,
    targets: OnboardingTargets,
    project_name: str,
    role_id: str,
    category_id: str,
    log=None,
) -> OnboardingChange:
    """Append a project option to every matching prompt.

    The role prompt gets an option granting the project role; the visibility
    prompt gets an option granting the role and showing the category. A prompt
    whose title matches both receives both options. ``config`` is not modified.

    Args:
        config: The fetched onboarding configuration.
        targets: The prompt titles to match exactly.
        project_name: Title of the new options.
        role_id: Id of the project role.
        category_id: Id of the project category.
        log: Optional ``WorkflowLog`` receiving progress lines.

    Returns:
        The modified copy and the titles of the prompts that changed.
    """
    def note(message: str) -> None:
        if log is not None:
            log.info(message)

    note(f"Looking for prompts: '{targets.role_prompt_title}' and '{targets.visibility_prompt_title}'")
    note(f"Found {len(config.prompts)} prompts in onboarding")

    updated: List[str] = []
    prompts: List[OnboardingPrompt] = []
    for prompt in config.prompts:
        note(f"Checking prompt: '{prompt.title}'")

        if targets.role_prompt_title and prompt.title == targets.role_prompt_title:
            note(f"Found role prompt: '{prompt.title}'")
            prompt = prompt.with_option(PromptOption(
                title=project_name,
                description=get_option_description("role", project_name),
                role_ids=(role_id,),
            ))
            updated.append(targets.role_prompt_title)

        if targets.visibility_prompt_title and prompt.title == targets.visibility_prompt_title:
            note(f"Found visibility prompt: '{prompt.title}'")
            prompt = prompt.with_option(PromptOption(
                title=project_name,
                description=get_option_description("visibility", project_name),
                role_ids=(role_id,),
                channel_ids=(category_id,),
            ))
            updated.append(targets.visibility_prompt_title)

        prompts.append(prompt)

    return OnboardingChange(config=replace(config, prompts=tuple(prompts)), updated_prompts=updated)
