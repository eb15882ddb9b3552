"""
Ledger services

- validator:   pure key/range/number checks
- score_store: Redis sorted-set primitives (+ atomic bounded increment)
- audit_log:   creation/deletion records (Redis hashes, or no-op)
- ledger:      create/get/add/delete/range queries/reap
- aggregator:  weighted merge across ledgers
"""
