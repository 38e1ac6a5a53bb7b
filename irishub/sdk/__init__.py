"""Addresses, decimals, coins, errors, stores and bank shared by the modules."""