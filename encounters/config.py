from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the encounter simulator."""

    package_root: Path = Path(__file__).resolve().parent
    data_dir: str = "data"
    schema_file: str = "schemas/table.schema.json"
    main_table_file: str = "WildMainTable.csv"
    sub_table_file: str = "WildSubTable.csv"
    monster_table_file: str = "MonsterDatabase.csv"
    null_entry: str = "-"

    num_encounters: int = Field(1000, ge=1)
    seed: Optional[int] = None

    # Monster database columns
    monster_number_col: str = "Number"
    monster_hdn_col: str = "HDN"
    monster_ehd_col: str = "EHD"

    model_config = SettingsConfigDict(env_prefix="WILD_SIM_")

    @property
    def data_path(self) -> Path:
        path = Path(self.data_dir)
        return path if path.is_absolute() else self.package_root / path

    @property
    def schema_path(self) -> Path:
        return self.package_root / self.schema_file

    @property
    def main_table_path(self) -> Path:
        return self.data_path / self.main_table_file

    @property
    def sub_table_path(self) -> Path:
        return self.data_path / self.sub_table_file

    @property
    def monster_table_path(self) -> Path:
        return self.data_path / self.monster_table_file


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
