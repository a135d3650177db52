"""An example file showing how to plot data from a simulation."""

import matplotlib.pyplot as plt
import numpy as np

import opendecay

# Set variables for what we want to read out.
isotopes = ["Rn-222", "Po-218", "Pb-214"]
n_ticks = 20

settings = opendecay.Settings()
settings.tick_increment = 3600 * 12

table = opendecay.ReferenceTable.json_read(settings.data_file)
population = opendecay.Population(opendecay.IsotopeResolver(table), settings)
population.add_isotope("Rn-222", 2000)

results = opendecay.simulate(population, n_ticks)

# Plot data
for isotope in isotopes:
    x, y = opendecay.evaluate_single_isotope(results, isotope)
    plt.plot(x / 3600, y, label=isotope)

t = np.linspace(0, n_ticks * settings.tick_increment, 100)
expected = [opendecay.expected_counts(table, {"Rn-222": 2000}, time)["Rn-222"]
            for time in t]
plt.plot(t / 3600, expected, "--", label="Rn-222 expected")

plt.xlabel("Time [h]")
plt.legend(loc="best")
plt.savefig("decay.pdf")
