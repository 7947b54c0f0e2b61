from sdstatus.dbus.connection import DBusConnectionManager
from sdstatus.dbus.interfaces import ManagerClient, UnitClient, UnitView
from sdstatus.dbus.manager import SystemdManager
from sdstatus.dbus.types import DBusVariantValue
from sdstatus.dbus.unit import SystemdUnit, SystemdUnitClient

__all__ = [
    'DBusConnectionManager',
    'DBusVariantValue',
    'ManagerClient',
    'SystemdManager',
    'SystemdUnit',
    'SystemdUnitClient',
    'UnitClient',
    'UnitView',
]
