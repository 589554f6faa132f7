"""Two Outputs Example for arithmetic-circuit.

Two independent outputs share one circuit:
- ``#2``: ``a^2``
- ``#4``: ``2 * b``

plus an equality assertion that ``b + b`` equals ``2 * b``.
Filling only ``a^2`` does not need a value for ``b``, and ``--all`` shows
every visited node:
    arithmetic-circuit fill examples/two_outputs.py --set a=3/2 --target 2 --all
"""

import arithmetic_circuit as ac

circuit = ac.Circuit("two outputs")

a = circuit.add_input("a")
b = circuit.add_input("b")
a_squared = circuit.add_mul(a, a)
two = circuit.add_constant(2, label="two")
double_b = circuit.add_mul(two, b)
circuit.mark_output(a_squared)
circuit.mark_output(double_b)

circuit.assert_equal(circuit.add_add(b, b), double_b)
