"""Registry layer.

Plain coroutine functions implementing the record rules on top of a
:class:`pygeocache.ledger.LedgerStub`.  They validate everything before
writing and never commit; :class:`pygeocache.client.GeocacheClient` owns the
transaction.
"""

__all__: list[str] = []
