from typing import Iterable, List

from features.wind.models.wind_types import AnnualStatistic, HourlySample

def is_unknown(speed: float) -> bool:
    # -999 marks a missing measurement
    return speed < 0

def aggregate_annual_statistics(
    station_name: str,
    samples: Iterable[HourlySample]
) -> List[AnnualStatistic]:
    """Average chronologically ordered hourly samples per calendar year.

    A sample belongs to the year of its own end timestamp, so the 00h value
    of January 1st opens the new year. Unknown speeds are ignored and a year
    without any known speed produces no statistic.
    """
    statistics: List[AnnualStatistic] = []
    current_year = None
    total = 0.0
    count = 0

    for sample in samples:
        year = sample.end_date.year
        if current_year is None:
            current_year = year

        if is_unknown(sample.speed):
            continue

        if year != current_year:
            if count:
                statistics.append(AnnualStatistic(
                    station_name=station_name,
                    year=current_year,
                    speed=total / count
                ))
            current_year = year
            total = 0.0
            count = 0

        total += sample.speed
        count += 1

    if count:
        statistics.append(AnnualStatistic(
            station_name=station_name,
            year=current_year,
            speed=total / count
        ))

    return statistics
