class InventoryError(Exception):
    """Base class for inventory store failures."""


class StoreUnavailable(InventoryError):
    """The remote collection could not be read or written."""


class InvalidInput(InventoryError):
    """Rejected item attributes (empty name, negative quantity or price)."""


class WriteConflict(StoreUnavailable):
    """Two writers created the same record at once; the later write was refused."""
