# type aliases for clarity
Address = str
HexHash = str
Timestamp = int

# seconds between the end of vesting and the earliest clawback
MIN_CLAWBACK_DELAY = 24 * 60 * 60
