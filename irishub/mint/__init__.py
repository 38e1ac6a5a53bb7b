"""Block inflation minting, its parameters and simulation helpers."""