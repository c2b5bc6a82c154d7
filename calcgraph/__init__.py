"""calcgraph — Expression calculator with graph sampling.

Tokenizes and evaluates flat arithmetic expressions (``+ - * / ^``,
parentheses, unary minus, ``sqrt sin cos tan csc sec cot``, the constants
π, ℯ, the previous answer, and a free variable ``x``), and samples ``x``
templates across a domain for plotting.

Usage:
    python -m calcgraph eval "2pi + sqrt(16)"    # Evaluate an expression
    python -m calcgraph graph "x^2" -r 20        # Sample y over x
    python -m calcgraph history                  # Show past results
"""
