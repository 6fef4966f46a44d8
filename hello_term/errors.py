"""Exceptions raised by the fact collectors"""


class GreeterError(Exception):
    """Base class for every failure that stops a fact from being collected"""


class ConfigError(GreeterError):
    """Config file missing, unparsable or lacking a required attribute"""


class CommandError(GreeterError):
    """External command could not be started or exited unsuccessfully"""


class SystemInfoError(GreeterError):
    """Kernel statistics (load, memory, disk) could not be read"""


class WeatherError(GreeterError):
    """Weather provider call failed"""
