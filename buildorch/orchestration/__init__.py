"""Root build orchestration"""

from .settings import BuildSettings, parse_settings, load_settings
from .layout import resolve_shared_build_dir, remap_build_dirs
from .toolchain import enforce_toolchain, register_toolchain_enforcer
from .ordering import declare_evaluation_order
from .warmup import warm_up_extension, register_plugin_warmup
from .clean import register_clean_task
from .declarations import declare_plugins, declare_repositories
from .script import RootConfiguration, configure_root, install_root_script, orchestrate

__all__ = [
    "BuildSettings",
    "parse_settings",
    "load_settings",
    "resolve_shared_build_dir",
    "remap_build_dirs",
    "enforce_toolchain",
    "register_toolchain_enforcer",
    "declare_evaluation_order",
    "warm_up_extension",
    "register_plugin_warmup",
    "register_clean_task",
    "declare_plugins",
    "declare_repositories",
    "RootConfiguration",
    "configure_root",
    "install_root_script",
    "orchestrate",
]
