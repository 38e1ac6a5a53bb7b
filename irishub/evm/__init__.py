"""Gas refunds and EIP-1559 base fee burning."""