"""An example file showing how to run a simulation."""

import opendecay

# Create settings variable
settings = opendecay.Settings()

settings.seed = 1
settings.tick_increment = 3600 * 24  # one day per tick
settings.remove_undecayable = True
settings.print_out = True

table = opendecay.ReferenceTable.json_read(settings.data_file)
resolver = opendecay.IsotopeResolver(table)

population = opendecay.Population(resolver, settings)
population.add_isotope("Rn-222", 1000)

# Print every decay that fails
def report(nuclide, outcome, time):
    if not outcome.success:
        print(nuclide.isotope_symbol, outcome.error)

population.on_decay(report)

# Simulate 30 days
opendecay.simulate(population, 30)

for label, (count, percent) in opendecay.evaluate_census(population).items():
    print(label, count, "{:.1f}%".format(percent))
