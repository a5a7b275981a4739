# carbon_ledger/errors.py


class CarbonLedgerError(Exception):
    """Base class for ledger validation failures."""


class InvalidInput(CarbonLedgerError, ValueError):
    pass


class UnknownPositiveAction(InvalidInput):
    pass


class InvalidActionValue(CarbonLedgerError, ValueError):
    pass


class UnknownFactor(CarbonLedgerError, LookupError):
    def __init__(self, category, type_):
        super().__init__(f"No emission factor for {category}/{type_}")
        self.category = category
        self.type = type_


class RecordNotFound(CarbonLedgerError, LookupError):
    def __init__(self, kind, record_id):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id
