from libs.datasets.sources.hospitalization_rates import HospitalizationRatesSource
from libs.datasets.sources.wastewater_levels import WastewaterLevelsSource
