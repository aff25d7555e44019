# SPDX-License-Identifier: GPL-3.0-or-later

import logging


def setup_logging(level: str = 'INFO') -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
    )
    logging.getLogger('tidynotes').setLevel(
        getattr(logging, level.upper(), logging.INFO))
