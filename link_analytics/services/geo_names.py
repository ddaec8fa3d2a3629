"""Static ISO code to display name tables used by the geo resolver."""

from typing import Optional

COUNTRY_NAMES = {
    'IN': 'India',
    'US': 'United States',
    'GB': 'United Kingdom',
    'CA': 'Canada',
    'AU': 'Australia',
    'DE': 'Germany',
    'FR': 'France',
    'JP': 'Japan',
    'CN': 'China',
    'BR': 'Brazil',
    'RU': 'Russia',
    'IT': 'Italy',
    'ES': 'Spain',
    'MX': 'Mexico',
    'ID': 'Indonesia',
    'NL': 'Netherlands',
    'SA': 'Saudi Arabia',
    'TR': 'Turkey',
    'CH': 'Switzerland',
    'PL': 'Poland',
    'BE': 'Belgium',
    'SE': 'Sweden',
    'NG': 'Nigeria',
    'AR': 'Argentina',
    'NO': 'Norway',
    'AT': 'Austria',
    'AE': 'United Arab Emirates',
    'IL': 'Israel',
    'IE': 'Ireland',
    'PH': 'Philippines',
    'SG': 'Singapore',
    'MY': 'Malaysia',
    'HK': 'Hong Kong',
    'DK': 'Denmark',
    'FI': 'Finland',
    'CL': 'Chile',
    'CO': 'Colombia',
    'ZA': 'South Africa',
    'PK': 'Pakistan',
    'BD': 'Bangladesh',
    'EG': 'Egypt',
    'VN': 'Vietnam',
    'TH': 'Thailand',
    'NZ': 'New Zealand',
    'PT': 'Portugal',
    'GR': 'Greece',
    'CZ': 'Czech Republic',
}

INDIAN_STATES = {
    'AN': 'Andaman and Nicobar Islands',
    'AP': 'Andhra Pradesh',
    'AR': 'Arunachal Pradesh',
    'AS': 'Assam',
    'BR': 'Bihar',
    'CH': 'Chandigarh',
    'CT': 'Chhattisgarh',
    'DD': 'Daman and Diu',
    'DL': 'Delhi',
    'DN': 'Dadra and Nagar Haveli',
    'GA': 'Goa',
    'GJ': 'Gujarat',
    'HP': 'Himachal Pradesh',
    'HR': 'Haryana',
    'JH': 'Jharkhand',
    'JK': 'Jammu and Kashmir',
    'KA': 'Karnataka',
    'KL': 'Kerala',
    'LA': 'Ladakh',
    'LD': 'Lakshadweep',
    'MH': 'Maharashtra',
    'ML': 'Meghalaya',
    'MN': 'Manipur',
    'MP': 'Madhya Pradesh',
    'MZ': 'Mizoram',
    'NL': 'Nagaland',
    'OR': 'Odisha',
    'PB': 'Punjab',
    'PY': 'Puducherry',
    'RJ': 'Rajasthan',
    'SK': 'Sikkim',
    'TG': 'Telangana',
    'TN': 'Tamil Nadu',
    'TR': 'Tripura',
    'UP': 'Uttar Pradesh',
    'UT': 'Uttarakhand',
    'WB': 'West Bengal',
}

US_STATES = {
    'AL': 'Alabama', 'AK': 'Alaska', 'AZ': 'Arizona', 'AR': 'Arkansas',
    'CA': 'California', 'CO': 'Colorado', 'CT': 'Connecticut', 'DE': 'Delaware',
    'FL': 'Florida', 'GA': 'Georgia', 'HI': 'Hawaii', 'ID': 'Idaho',
    'IL': 'Illinois', 'IN': 'Indiana', 'IA': 'Iowa', 'KS': 'Kansas',
    'KY': 'Kentucky', 'LA': 'Louisiana', 'ME': 'Maine', 'MD': 'Maryland',
    'MA': 'Massachusetts', 'MI': 'Michigan', 'MN': 'Minnesota', 'MS': 'Mississippi',
    'MO': 'Missouri', 'MT': 'Montana', 'NE': 'Nebraska', 'NV': 'Nevada',
    'NH': 'New Hampshire', 'NJ': 'New Jersey', 'NM': 'New Mexico', 'NY': 'New York',
    'NC': 'North Carolina', 'ND': 'North Dakota', 'OH': 'Ohio', 'OK': 'Oklahoma',
    'OR': 'Oregon', 'PA': 'Pennsylvania', 'RI': 'Rhode Island', 'SC': 'South Carolina',
    'SD': 'South Dakota', 'TN': 'Tennessee', 'TX': 'Texas', 'UT': 'Utah',
    'VT': 'Vermont', 'VA': 'Virginia', 'WA': 'Washington', 'WV': 'West Virginia',
    'WI': 'Wisconsin', 'WY': 'Wyoming', 'DC': 'District of Columbia',
}

REGIONS_BY_COUNTRY = {
    'IN': INDIAN_STATES,
    'US': US_STATES,
}


def get_country_name(country_code: Optional[str], fallback: Optional[str] = None) -> Optional[str]:
    """
    Full country name from the table, else ``fallback`` (the database's own
    name), else the code itself.
    """
    if not country_code:
        return fallback or None
    return COUNTRY_NAMES.get(country_code.upper()) or fallback or country_code


def get_region_name(
    region_code: Optional[str],
    country_code: Optional[str],
    fallback: Optional[str] = None,
) -> Optional[str]:
    """Full region name for Indian and US codes; otherwise ``fallback``, then the code."""
    if not region_code:
        return fallback or None
    regions = REGIONS_BY_COUNTRY.get((country_code or "").upper(), {})
    return regions.get(region_code.upper()) or fallback or region_code
