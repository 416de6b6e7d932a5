"""Domain constants shared by the conversion engine, history and API."""

from typing import Dict

BASE_CURRENCY = "USD"

# Display names for the codes users pick most often; anything else the rate
# snapshot returns is shown by its code.
CURRENCY_NAMES: Dict[str, str] = {
    "USD": "Dólar Americano",
    "EUR": "Euro",
    "BRL": "Real Brasileiro",
    "JPY": "Iene Japonês",
    "GBP": "Libra Esterlina",
    "AUD": "Dólar Australiano",
    "CAD": "Dólar Canadense",
    "CHF": "Franco Suíço",
    "CNY": "Yuan Chinês",
    "INR": "Rúpia Indiana",
    "MXN": "Peso Mexicano",
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "ADA": "Cardano",
    "DOGE": "Dogecoin",
}

DEFAULT_FROM = "USD"
DEFAULT_TO = "BRL"

# Conversion display markers
ZERO_DISPLAY = "0.00"
ERROR_DISPLAY = "Erro"
