from datetime import datetime
from functools import wraps

default_settings = {
    # Reference instant for relative expressions. False means "read the clock".
    "RELATIVE_BASE": False,
    # Reject characters that are not part of any operation token.
    "STRICT_PARSING": False,
    # Emit a rounding suffix on aligned formats so that parse(format(d)) == d.
    "ROUND_TRIP_FORMAT": True,
    "RETURN_AS_TIMEZONE_AWARE": True,
}


class Settings:
    """Control and configure default parsing and formatting behavior of nowparser.

    Currently, supported settings are:

    * `RELATIVE_BASE`
    * `STRICT_PARSING`
    * `ROUND_TRIP_FORMAT`
    * `RETURN_AS_TIMEZONE_AWARE`
    """

    _default = True
    _mod_settings = dict()

    def __init__(self, settings=None):
        if settings:
            self._updateall(settings.items())
        else:
            self._updateall(default_settings.items())

    def _updateall(self, iterable):
        for key, value in iterable:
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for k, v in kwds.items():
            if v is None:
                raise TypeError('Invalid {{"{}": {}}}'.format(k, v))

        for x in default_settings.keys():
            kwds.setdefault(x, getattr(self, x))

        kwds["_default"] = False
        if mod_settings:
            kwds["_mod_settings"] = mod_settings

        return self.__class__(settings=kwds)

    def __repr__(self):
        values = ", ".join(
            "{}={!r}".format(key, getattr(self, key)) for key in default_settings
        )
        return "Settings({})".format(values)


settings = Settings()


def apply_settings(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")

        kwargs["settings"] = mod_settings or settings

        if isinstance(kwargs["settings"], dict):
            kwargs["settings"] = settings.replace(
                mod_settings=mod_settings, **kwargs["settings"]
            )

        if not isinstance(kwargs["settings"], Settings):
            raise TypeError(
                "settings can only be either dict or instance of Settings class"
            )

        return f(*args, **kwargs)

    return wrapper


class SettingValidationError(ValueError):
    pass


def _check_relative_base(setting_name, setting_value):
    if setting_value is False:
        return
    if not isinstance(setting_value, datetime):
        raise SettingValidationError(
            '"{}" must be a datetime, not "{}".'.format(
                setting_name, type(setting_value).__name__
            )
        )


def check_settings(settings):
    """
    Check if provided settings are valid, if not it raises `SettingValidationError`.
    Only checks for the modified settings.
    """
    settings_values = {
        "RELATIVE_BASE": {
            "type": datetime,
            "extra_check": _check_relative_base,
        },
        "STRICT_PARSING": {
            "type": bool,
        },
        "ROUND_TRIP_FORMAT": {
            "type": bool,
        },
        "RETURN_AS_TIMEZONE_AWARE": {
            "type": bool,
        },
    }

    modified_settings = settings._mod_settings  # check only modified settings

    for setting_name, setting_value in modified_settings.items():
        setting_props = settings_values.get(setting_name)

        if not setting_props:
            raise SettingValidationError(
                '"{}" is not a valid setting'.format(setting_name)
            )

        extra_check = setting_props.get("extra_check")
        if extra_check:
            extra_check(setting_name, setting_value)
            continue

        setting_type = type(setting_value)
        if setting_type != setting_props["type"]:
            raise SettingValidationError(
                '"{}" must be "{}", not "{}".'.format(
                    setting_name, setting_props["type"].__name__, setting_type.__name__
                )
            )
