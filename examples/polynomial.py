"""Polynomial Example for arithmetic-circuit.

This example builds ``F(x) = x^2 + x + 5`` as a circuit and checks its gates.

Run it from the command line:
    arithmetic-circuit fill examples/polynomial.py --set x=5 --check
"""

import arithmetic_circuit as ac

circuit = ac.Circuit("x^2 + x + 5")

x = circuit.add_input("x")
x_squared = circuit.add_mul(x, x)
five = circuit.add_constant(5)
x_squared_plus_5 = circuit.add_add(x_squared, five)
result = circuit.add_add(x_squared_plus_5, x)
circuit.mark_output(result)


if __name__ == "__main__":
    filled = ac.fill(circuit, circuit.assign(5))
    print(f"F(5) = {filled[result]}")  # noqa: T201
    print(f"All constraints hold: {filled.check_constraints()}")  # noqa: T201
