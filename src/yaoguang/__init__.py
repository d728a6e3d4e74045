"""Node identity keys for the yaoguang ledger."""
