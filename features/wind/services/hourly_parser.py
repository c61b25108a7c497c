import logging
from datetime import datetime
from typing import Iterable, List

from features.wind.models.wind_types import HourlySample
from core.config import settings

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ";"

def parse_hourly_sample(line: str, time_format: str = settings.hourly_time_format) -> HourlySample:
    """Parse a product file line.

    Example: ``3;2010123123;    3;   4.0;  270;eor``
    (STATIONS_ID;MESS_DATUM;QN_3;F;D;eor)
    """
    parts = line.replace(" ", "").split(FIELD_SEPARATOR)
    if len(parts) < 4:
        raise ValueError(f"not enough fields: {line.strip()!r}")

    try:
        end_date = datetime.strptime(parts[1], time_format)
    except ValueError as e:
        raise ValueError(f"failed to parse end date value: {str(e)}") from e

    try:
        speed = float(parts[3])
    except ValueError as e:
        raise ValueError(f"failed to parse speed value: {str(e)}") from e

    return HourlySample(end_date=end_date, speed=speed)

def parse_hourly_samples(
    lines: Iterable[str],
    time_format: str = settings.hourly_time_format
) -> List[HourlySample]:
    """Parse all measurement lines, dropping the header and malformed lines."""
    samples = []
    for number, line in enumerate(lines):
        # first line is the column header
        if number == 0 or not line.strip():
            continue
        try:
            samples.append(parse_hourly_sample(line, time_format))
        except ValueError as e:
            logger.warning(f"Skipping measurement line {number + 1}: {str(e)}")

    logger.info(f"Parsed {len(samples)} hourly samples")
    return samples
