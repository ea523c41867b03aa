# File containing shared parameters for the sampling engine

# Linear-congruential generator (glibc / Numerical Recipes constants)
lcg_multiplier = 1664525
lcg_increment = 1013904223
lcg_modulus = 2**32

# Accepted seed range (32-bit, signed or unsigned)
seed_min = -(2**31)
seed_max = 2**32 - 1

# Column names added to exported samples
original_index_column = "_original_index"
replacement_column = "_is_replacement"

# Complementary sample limits
max_complementary_sample = 15
max_total_sample = 80

# Complementary sample multiplier per qualitative impact
impact_factors = {
    "low": 0.5,
    "medium": 1.0,
    "high": 1.5,
}
