"""
Demo: combinations and permutations of twelve symbols

Demonstrates:
- ``new_combination_generator`` / ``new_permutation_generator``
- ``generate`` for full value lists, ``count`` for sizes
- Debug logging of index generation and chunk fan-out
"""

import logging

from combogen import WorkerPool, new_combination_generator, new_permutation_generator

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

SYMBOLS = "A,B,G,D,T,X,K,E,R,1,2,3".split(",")

# ============================================================================
# Shared pool for both generators
# ============================================================================

pool = WorkerPool()
print(pool)

permutation = new_permutation_generator(*SYMBOLS, pool=pool)
combination = new_combination_generator(*SYMBOLS, pool=pool)

# ============================================================================
# Combinations of length 5
# ============================================================================

combination_list = combination.generate(5)
print("List of combination")
print(combination_list)

# ============================================================================
# Permutations of length 5
# ============================================================================

permutation_list = permutation.generate(5)
print("Permutation size")
print(len(permutation_list))
assert len(permutation_list) == permutation.count(5)
