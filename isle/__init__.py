"""Isle community platform: notification ledger and conversation engine."""
