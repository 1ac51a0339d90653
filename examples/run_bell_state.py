"""Example: Bell state and a controlled-Hadamard on tiny-qsim."""
from tiny_qsim import Circuit, Gate, display_result

print("=" * 50)
print("tiny-qsim: Bell State Example")
print("=" * 50)

qc = Circuit(2).h(0).cx(0, 1)
display_result(qc.run())

print("\nExpected: 0.70711 on |00⟩ and |11⟩ (entangled!)")

print("\n" + "=" * 50)
print("Controlled Hadamard (control 1, target 0)")
print("=" * 50)

qc = Circuit(2).h(1)
qc.add_gate(Gate.h(0).controlled([1]))
display_result(qc.run())
