# ============================================================================
# MOCK SNAPSHOT GENERATOR
# ============================================================================
# EPOCH: 1 - FLEET PROBING
# STATUS: Service - Demo data for screenshots and UI development
# PURPOSE: Generate a realistic twelve-database fleet without probing
# CREATED: 18 OCT 2026
# ============================================================================
"""
Mock Snapshot Generator

Builds a fleet snapshot of twelve fictional databases with localized
role/state strings. Every fourth database simulates a mounted standby
with a larger lag and a failed DR connect.
"""

import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from core.models.config import TitlesConfig
from core.models.status import SystemStatus


@dataclass(frozen=True)
class MockVocabulary:
    primary: str
    physical_standby: str
    open: str
    read_only: str
    mounted: str


VOCABULARY: Dict[str, MockVocabulary] = {
    "en": MockVocabulary(
        primary="PRIMARY",
        physical_standby="PHYSICAL STANDBY",
        open="OPEN",
        read_only="READ ONLY WITH APPLY",
        mounted="MOUNTED",
    ),
    "zh": MockVocabulary(
        primary="主数据库",
        physical_standby="物理备库",
        open="读写打开",
        read_only="只读应用",
        mounted="已挂载",
    ),
    "ja": MockVocabulary(
        primary="プライマリ",
        physical_standby="フィジカル・スタンバイ",
        open="オープン",
        read_only="READ ONLY WITH APPLY",
        mounted="マウント済み",
    ),
}

TITLES: Dict[str, TitlesConfig] = {
    "en": TitlesConfig(
        main_title="Tier-1 Business Oracle DR Monitoring Dashboard (Mock)",
        prod_data_center="Production Data Center",
        dr_data_center="Disaster Recovery Data Center",
    ),
    "zh": TitlesConfig(
        main_title="一级业务Oracle容灾监控大盘 (模拟)",
        prod_data_center="生产数据中心",
        dr_data_center="容灾数据中心",
    ),
    "ja": TitlesConfig(
        main_title="ティア1ビジネスOracle DR監視ダッシュボード (モック)",
        prod_data_center="本番データセンター",
        dr_data_center="災害復旧データセンター",
    ),
}

MOCK_DATABASES = [
    "MES_DB", "ERP_DB", "SCM_DB", "WMS_DB", "PLM_DB", "CRM_DB",
    "QMS_DB", "HRM_DB", "FIN_DB", "BI_DB", "OA_DB", "DCS_DB",
]


def mock_titles(lang: str) -> TitlesConfig:
    """Titles for a language, English when unsupported."""
    return TITLES.get(lang, TITLES["en"])


def generate_mock_snapshot(
    lang: str = "en",
    rng: Optional[random.Random] = None,
) -> List[SystemStatus]:
    """
    Generate the mock fleet.

    Args:
        lang: en, zh or ja (falls back to en)
        rng: Random source; pass a seeded one for reproducible output

    Returns:
        Twelve SystemStatus records in MOCK_DATABASES order
    """
    rng = rng or random.Random()
    vocab = VOCABULARY.get(lang, VOCABULARY["en"])

    statuses = []
    for i, name in enumerate(MOCK_DATABASES):
        mounted = i % 4 == 0
        if mounted:
            disaster_status = vocab.mounted
            disaster_delay = rng.randrange(60, 180)
        else:
            disaster_status = vocab.read_only
            disaster_delay = rng.randrange(0, 20)

        statuses.append(SystemStatus(
            name=name,
            load_balancer_ip=f"172.16.10.{100 + i}",
            load_balancer_alive=True,
            load_balancer_port_1521=True,
            load_balancer_db_connect=True,
            connections=rng.randrange(50, 200),
            production_ip=f"10.10.1.{10 + i}",
            production_alive=True,
            production_port_1521=True,
            production_db_connect=True,
            production_status=vocab.open,
            production_role=vocab.primary,
            production_dgdelay=0,
            disaster_ip=f"10.20.1.{10 + i}",
            disaster_alive=True,
            disaster_port_1521=True,
            disaster_db_connect=not mounted,
            disaster_status=disaster_status,
            disaster_role=vocab.physical_standby,
            disaster_dgdelay=disaster_delay,
        ))
    return statuses


__all__ = [
    "VOCABULARY",
    "TITLES",
    "MOCK_DATABASES",
    "mock_titles",
    "generate_mock_snapshot",
]
