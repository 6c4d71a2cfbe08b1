from adapters.aave_v2.common import AaveBasePoolAdapter
from adapters.base import AdapterSettings
from adapters.cache_to_file import cache_to_file


class AaveV2StableDebtTokenPoolAdapter(AaveBasePoolAdapter):
    product_id = "stable-debt-token"
    adapter_settings = AdapterSettings(version=2)

    def get_protocol_details(self):
        return self.make_protocol_details(
            name="Aave v2 StableDebtToken",
            description="Aave v2 defi adapter for stable interest-accruing token",
            site_url="https://aave.com/",
            icon_url="https://aave.com/favicon.ico",
            position_type="borrow",
        )

    @cache_to_file(file_key="stable-debt-token-v2")
    async def get_protocol_tokens(self):
        return await super().get_protocol_tokens()

    def get_reserve_token_address(self, reserve_token_addresses):
        return reserve_token_addresses[1]
