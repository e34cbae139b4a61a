# cars/data.py
# Bundled subset of the external brand/model catalog. Listings store the
# catalog identifiers; these entries resolve them to display names offline.

CAR_BRANDS = [
    {
        "id": "VAZ",
        "name": "Lada (ВАЗ)",
        "cyrillic-name": "Лада",
        "popular": True,
        "country": "Россия",
        "models": [
            {"id": "VAZ_1111", "name": "1111 Ока", "cyrillic-name": "Ока", "class": "A", "year-from": 1987, "year-to": 2008},
            {"id": "VAZ_GRANTA", "name": "Granta", "cyrillic-name": "Гранта", "class": "B", "year-from": 2011, "year-to": None},
            {"id": "VAZ_VESTA", "name": "Vesta", "cyrillic-name": "Веста", "class": "B", "year-from": 2015, "year-to": None},
            {"id": "VAZ_NIVA", "name": "Niva Legend", "cyrillic-name": "Нива Легенд", "class": "J", "year-from": 1977, "year-to": None},
        ],
    },
    {
        "id": "TOYOTA",
        "name": "Toyota",
        "cyrillic-name": "Тойота",
        "popular": True,
        "country": "Япония",
        "models": [
            {"id": "TOYOTA_CAMRY", "name": "Camry", "cyrillic-name": "Камри", "class": "D", "year-from": 1982, "year-to": None},
            {"id": "TOYOTA_COROLLA", "name": "Corolla", "cyrillic-name": "Королла", "class": "C", "year-from": 1966, "year-to": None},
            {"id": "TOYOTA_RAV_4", "name": "RAV4", "cyrillic-name": "РАВ4", "class": "J", "year-from": 1994, "year-to": None},
            {"id": "TOYOTA_LAND_CRUISER", "name": "Land Cruiser", "cyrillic-name": "Ленд Крузер", "class": "J", "year-from": 1951, "year-to": None},
        ],
    },
    {
        "id": "KIA",
        "name": "Kia",
        "cyrillic-name": "Киа",
        "popular": True,
        "country": "Южная Корея",
        "models": [
            {"id": "KIA_RIO", "name": "Rio", "cyrillic-name": "Рио", "class": "B", "year-from": 2000, "year-to": None},
            {"id": "KIA_SPORTAGE", "name": "Sportage", "cyrillic-name": "Спортейдж", "class": "J", "year-from": 1993, "year-to": None},
        ],
    },
    {
        "id": "HYUNDAI",
        "name": "Hyundai",
        "cyrillic-name": "Хендай",
        "popular": True,
        "country": "Южная Корея",
        "models": [
            {"id": "HYUNDAI_SOLARIS", "name": "Solaris", "cyrillic-name": "Солярис", "class": "B", "year-from": 2010, "year-to": None},
            {"id": "HYUNDAI_CRETA", "name": "Creta", "cyrillic-name": "Крета", "class": "J", "year-from": 2015, "year-to": None},
        ],
    },
    {
        "id": "BMW",
        "name": "BMW",
        "cyrillic-name": "БМВ",
        "popular": True,
        "country": "Германия",
        "models": [
            {"id": "BMW_3ER", "name": "3 серии", "cyrillic-name": "3 серии", "class": "D", "year-from": 1975, "year-to": None},
            {"id": "BMW_5ER", "name": "5 серии", "cyrillic-name": "5 серии", "class": "E", "year-from": 1972, "year-to": None},
            {"id": "BMW_X5", "name": "X5", "cyrillic-name": "Х5", "class": "J", "year-from": 1999, "year-to": None},
        ],
    },
    {
        "id": "VOLKSWAGEN",
        "name": "Volkswagen",
        "cyrillic-name": "Фольксваген",
        "popular": True,
        "country": "Германия",
        "models": [
            {"id": "VOLKSWAGEN_POLO", "name": "Polo", "cyrillic-name": "Поло", "class": "B", "year-from": 1975, "year-to": None},
            {"id": "VOLKSWAGEN_TIGUAN", "name": "Tiguan", "cyrillic-name": "Тигуан", "class": "J", "year-from": 2007, "year-to": None},
        ],
    },
]
