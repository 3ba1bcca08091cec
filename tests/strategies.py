"""Hypothesis strategies for property-based testing of knit-core."""

from hypothesis import strategies as st

# -----------------------------------------------------------------------------
# Basic value strategies
# -----------------------------------------------------------------------------

integers = st.integers(min_value=-(2**31), max_value=2**31)
texts = st.text(min_size=0, max_size=50)
int_lists = st.lists(integers, max_size=30)

# -----------------------------------------------------------------------------
# Function strategies
# -----------------------------------------------------------------------------

# Unary int -> int functions
unary_int_fns = st.sampled_from([
    lambda n: n + 1,
    lambda n: n - 7,
    lambda n: n * 2,
    lambda n: -n,
    lambda n: n // 3,
    abs,
])

int_predicates = st.sampled_from([
    lambda n: n % 2 == 0,
    lambda n: n > 0,
    lambda n: n < 100,
    lambda n: True,
    lambda n: False,
])

# -----------------------------------------------------------------------------
# Memo key strategies
# -----------------------------------------------------------------------------

# JSON-like argument values that canonicalize structurally
json_scalars = st.one_of(st.none(), st.booleans(), integers, texts)
json_values = st.recursive(
    json_scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.text(max_size=8), children, max_size=4),
    ),
    max_leaves=12,
)
