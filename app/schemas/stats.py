from pydantic import BaseModel, ConfigDict, Field


class Stats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_listings: int = Field(alias="totalMaisons")
    total_users: int = Field(alias="totalUsers")
    total_payments: int = Field(alias="totalPaiements")
    # sum of all transaction amounts
    total_revenue: float = Field(alias="revenusTotaux")
