from .loader import ConfigError, load_config_files
from .schema import KeySpec, make_choices_validator, make_range_validator
from .settings import (
	DEFAULT_SCHEMA,
	EstimatorSettings,
	get_settings,
	load_settings,
	override_settings,
	reset_settings,
	set_settings,
)

__all__ = [
	"ConfigError",
	"load_config_files",
	"KeySpec",
	"make_choices_validator",
	"make_range_validator",
	"DEFAULT_SCHEMA",
	"EstimatorSettings",
	"get_settings",
	"load_settings",
	"override_settings",
	"reset_settings",
	"set_settings",
]
