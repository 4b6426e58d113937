# storage/schema.py
TX_HASH = "Transaction Hash"
DATE_TIME = "Date & Time"
FROM_ADDRESS = "From Address"
TO_ADDRESS = "To Address"
TX_TYPE = "Transaction Type"
ASSET_CONTRACT = "Asset Contract Address"
ASSET_SYMBOL = "Asset Symbol / Name"
TOKEN_ID = "Token ID"
VALUE = "Value / Amount"
GAS_FEE = "Gas Fee (ETH)"

# column order of the exported CSV
CSV_HEADERS = [
    TX_HASH,
    DATE_TIME,
    FROM_ADDRESS,
    TO_ADDRESS,
    TX_TYPE,
    ASSET_CONTRACT,
    ASSET_SYMBOL,
    TOKEN_ID,
    VALUE,
    GAS_FEE,
]

# Transaction Type values
ETH_TRANSFER = "ETH transfer"
CONTRACT_INTERACTION = "Contract Interaction"
INTERNAL_TRANSFER = "Internal Transfer"
ERC20 = "ERC-20"
ERC721 = "ERC-721"
