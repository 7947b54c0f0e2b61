class SdstatusError(Exception):
    """Base class for all errors reported to the operator.
    """


class InvalidUnitNameError(SdstatusError):
    """A unit name could not be turned into a unit identifier.

    Name normalization is total, so this is currently never raised.
    """

    def __init__(self, unit_name: str):
        super().__init__(f'Invalid unit name: {unit_name!r}')
        self.unit_name = unit_name


class UnitNotFoundError(SdstatusError):
    """The service manager does not know the requested unit.
    """

    def __init__(self, unit_name: str):
        super().__init__(f'Unit {unit_name} not found.')
        self.unit_name = unit_name


class TransportError(SdstatusError):
    """A call to the service manager failed.
    """


class UnrecognizedStateError(SdstatusError):
    """The service manager reported an active state outside the known set.
    """

    def __init__(self, value: str):
        super().__init__(f'Service manager sent unknown active state: {value!r}')
        self.value = value
