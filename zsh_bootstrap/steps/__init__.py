from .step_20_install_packages import InstallPackagesStep
from .step_30_migrate_zshrc import MigrateZshrcStep
from .step_40_install_framework import InstallFrameworkStep
from .step_50_install_plugins import InstallPluginsStep
from .step_60_modular_config import ModularConfigStep
from .step_65_install_scripts import InstallScriptsStep
from .step_70_configure_zshrc import ConfigureZshrcStep
from .step_80_install_fonts import InstallFontsStep
from .step_90_default_shell import DefaultShellStep

__all__ = [
    "InstallPackagesStep",
    "MigrateZshrcStep",
    "InstallFrameworkStep",
    "InstallPluginsStep",
    "ModularConfigStep",
    "InstallScriptsStep",
    "ConfigureZshrcStep",
    "InstallFontsStep",
    "DefaultShellStep",
]
