"""Built-in geography: community cities and simplified continent outlines."""

from geoglobe.models import City, ContinentOutline, GeoPoint


def _outline(name: str, coords) -> ContinentOutline:
    return ContinentOutline(name, tuple(GeoPoint(lat, lon) for lat, lon in coords))


CITIES = (
    City('San Francisco', GeoPoint(37.7749, -122.4194), '#8B5CF6', 85),
    City('New York', GeoPoint(40.7128, -74.0060), '#3B82F6', 72),
    City('London', GeoPoint(51.5074, -0.1278), '#EC4899', 68),
    City('Berlin', GeoPoint(52.5200, 13.4050), '#10B981', 54),
    City('Tokyo', GeoPoint(35.6762, 139.6503), '#F59E0B', 91),
    City('Singapore', GeoPoint(1.3521, 103.8198), '#06B6D4', 63),
    City('Sydney', GeoPoint(-33.8688, 151.2093), '#8B5CF6', 47),
    City('São Paulo', GeoPoint(-23.5505, -46.6333), '#3B82F6', 56),
    City('Dubai', GeoPoint(25.2048, 55.2708), '#EC4899', 42),
    City('Toronto', GeoPoint(43.6532, -79.3832), '#10B981', 51),
)

# (lat, lon) pairs, each outline closes on its first vertex
CONTINENT_OUTLINES = (
    _outline('North America', [
        (71, -156), (70, -141), (69, -137), (60, -141), (58, -137), (54, -130), (49, -123),
        (48, -123), (45, -74), (47, -53), (52, -56), (60, -65), (65, -62), (70, -70),
        (72, -80), (74, -95), (75, -120), (73, -140), (71, -156)]),
    _outline('South America', [
        (12, -72), (11, -61), (5, -52), (0, -51), (-5, -35), (-23, -43), (-33, -53),
        (-41, -65), (-47, -70), (-54, -68), (-55, -67), (-53, -70), (-33, -71), (-18, -70),
        (-5, -80), (0, -79), (9, -79), (12, -72)]),
    _outline('Europe', [
        (71, 26), (70, 59), (69, 33), (60, 25), (60, 5), (55, -5), (52, -5), (50, 2),
        (43, -8), (36, -5), (36, 12), (40, 20), (42, 43), (45, 40), (48, 30), (55, 38),
        (60, 50), (65, 40), (71, 26)]),
    _outline('Africa', [
        (37, -6), (35, 10), (32, 32), (30, 35), (15, 43), (12, 43), (5, 40), (-5, 40),
        (-10, 33), (-15, 35), (-20, 35), (-25, 32), (-30, 28), (-33, 27), (-34, 19),
        (-28, 16), (-22, 14), (-15, 12), (-5, 10), (5, 9), (10, 15), (15, 20), (20, 33),
        (30, 32), (35, 32), (37, 10), (37, -6)]),
    _outline('Asia', [
        (77, 104), (73, 80), (70, 73), (66, 40), (43, 48), (40, 60), (36, 58), (25, 57),
        (20, 72), (10, 100), (1, 104), (-10, 110), (-8, 123), (1, 125), (8, 140),
        (20, 136), (35, 138), (42, 143), (46, 142), (51, 156), (60, 165), (65, 170),
        (70, 180), (73, 180), (77, 104)]),
    _outline('Australia', [
        (-10, 142), (-11, 130), (-20, 114), (-26, 113), (-34, 115), (-35, 117), (-38, 140),
        (-39, 145), (-43, 147), (-39, 148), (-34, 151), (-28, 153), (-20, 149), (-15, 145),
        (-10, 142)]),
    _outline('India', [
        (35, 74), (30, 70), (23, 68), (20, 70), (16, 73), (10, 77), (8, 77), (8, 92),
        (13, 97), (20, 88), (22, 88), (26, 83), (28, 78), (30, 78), (32, 75), (35, 74)]),
    _outline('Japan', [
        (45, 142), (43, 144), (41, 140), (38, 140), (35, 136), (34, 136), (33, 130),
        (31, 131), (33, 135), (35, 140), (38, 142), (42, 145), (45, 142)]),
    _outline('UK', [
        (59, -3), (57, -7), (55, -6), (52, -5), (50, -5), (50, 1), (51, 1), (53, 0),
        (55, -2), (57, -2), (59, -3)]),
    _outline('Scandinavia', [
        (71, 26), (70, 31), (68, 29), (65, 24), (62, 17), (60, 11), (58, 11), (56, 12),
        (58, 18), (60, 25), (65, 28), (68, 31), (71, 26)]),
    _outline('China', [
        (53, 124), (50, 119), (46, 124), (42, 131), (40, 124), (35, 107), (32, 104),
        (28, 102), (23, 100), (20, 110), (23, 116), (28, 122), (35, 125), (40, 127),
        (45, 135), (48, 134), (53, 124)]),
    _outline('Brazil', [
        (5, -60), (2, -52), (-5, -35), (-10, -36), (-15, -39), (-20, -40), (-23, -44),
        (-28, -48), (-33, -53), (-30, -57), (-25, -54), (-20, -50), (-10, -50), (-5, -55),
        (0, -60), (5, -60)]),
    _outline('Greenland', [
        (83, -35), (81, -30), (78, -18), (76, -18), (70, -22), (66, -35), (60, -43),
        (60, -51), (63, -50), (68, -53), (72, -55), (76, -68), (79, -70), (81, -60),
        (83, -45), (83, -35)]),
    _outline('New Zealand', [
        (-34, 172), (-37, 174), (-41, 174), (-43, 171), (-46, 167), (-47, 168), (-45, 170),
        (-41, 173), (-38, 178), (-35, 174), (-34, 172)]),
    _outline('Madagascar', [
        (-12, 49), (-14, 50), (-19, 47), (-23, 44), (-25, 45), (-23, 48), (-19, 49),
        (-15, 50), (-12, 49)]),
    _outline('Italy', [
        (47, 12), (45, 7), (44, 8), (41, 9), (38, 16), (37, 15), (40, 18), (41, 15),
        (43, 13), (45, 11), (47, 12)]),
    _outline('Iberia', [
        (43, -8), (42, -9), (39, -9), (37, -7), (36, -6), (36, 0), (38, 0), (40, 3),
        (43, -2), (43, -8)]),
)
