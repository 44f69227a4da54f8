from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ConversionRequest(BaseModel):
	amount: Decimal = Field(..., description='Amount to convert, must be positive')
	source_currency: str = Field(..., description='Currency the amount is in')
	target_currency: str = Field(..., description='Currency to convert into')

	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		json_schema_extra={
			'example': {'amount': 100.00, 'sourceCurrency': 'USD', 'targetCurrency': 'EUR'}
		},
	)
