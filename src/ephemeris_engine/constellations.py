"""Constellation identification from the IAU boundaries of 1875.0.

The boundaries (Delporte 1930) follow lines of constant right ascension
and declination of the B1875.0 equinox, so a position is precessed to
that equinox before the table lookup (Roman 1987, CDS VI/42).
"""

from __future__ import annotations

import math
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, NamedTuple

from ephemeris_engine.constants import ARCSEC_TO_RAD
from ephemeris_engine.geometry import normalize_radians
from ephemeris_engine.precession import compute_vondrak
from ephemeris_engine.time_utils import JulianDay
from ephemeris_engine.vec_math import Matrix4, Vector3

if TYPE_CHECKING:
    from ephemeris_engine.observer import Observer

# Obliquity used for the frame of the B1875.0 boundaries, arcseconds
_BOUNDARY_OBLIQUITY_ARCSEC = 84381.406


class Constellation(Enum):
    """The 88 IAU constellations: Latin name, abbreviation, genitive and meaning."""

    AND = ('Andromeda', 'And', 'Andromedae', 'Princess of Ethiopia')
    ANT = ('Antlia', 'Ant', 'Antliae', 'Air pump')
    APS = ('Apus', 'Aps', 'Apodis', 'Bird of Paradise')
    AQR = ('Aquarius', 'Aqr', 'Aquarii', 'Water bearer')
    AQL = ('Aquila', 'Aql', 'Aquilae', 'Eagle')
    ARA = ('Ara', 'Ara', 'Arae', 'Altar')
    ARI = ('Aries', 'Ari', 'Arietis', 'Ram')
    AUR = ('Auriga', 'Aur', 'Aurigae', 'Charioteer')
    BOO = ('Boötes', 'Boo', 'Boötis', 'Herdsman')
    CAE = ('Caelum', 'Cae', 'Caeli', 'Graving tool')
    CAM = ('Camelopardalis', 'Cam', 'Camelopardalis', 'Giraffe')
    CNC = ('Cancer', 'Cnc', 'Cancri', 'Crab')
    CVN = ('Canes Venatici', 'CVn', 'Canum Venaticorum', 'Hunting dogs')
    CMA = ('Canis Major', 'CMa', 'Canis Majoris', 'Big dog')
    CMI = ('Canis Minor', 'CMi', 'Canis Minoris', 'Little dog')
    CAP = ('Capricornus', 'Cap', 'Capricorni', 'Sea goat')
    CAR = ('Carina', 'Car', 'Carinae', "Keel of Argonauts' ship")
    CAS = ('Cassiopeia', 'Cas', 'Cassiopeiae', 'Queen of Ethiopia')
    CEN = ('Centaurus', 'Cen', 'Centauri', 'Centaur')
    CEP = ('Cepheus', 'Cep', 'Cephei', 'King of Ethiopia')
    CET = ('Cetus', 'Cet', 'Ceti', 'Sea monster (whale)')
    CHA = ('Chamaeleon', 'Cha', 'Chamaeleontis', 'Chameleon')
    CIR = ('Circinus', 'Cir', 'Circini', 'Compasses')
    COL = ('Columba', 'Col', 'Columbae', 'Dove')
    COM = ('Coma Berenices', 'Com', 'Comae Berenices', "Berenice's hair")
    CRA = ('Corona Australis', 'CrA', 'Coronae Australis', 'Southern crown')
    CRB = ('Corona Borealis', 'CrB', 'Coronae Borealis', 'Northern crown')
    CRV = ('Corvus', 'Crv', 'Corvi', 'Crow')
    CRT = ('Crater', 'Crt', 'Crateris', 'Cup')
    CRU = ('Crux', 'Cru', 'Crucis', 'Cross')
    CYG = ('Cygnus', 'Cyg', 'Cygni', 'Swan')
    DEL = ('Delphinus', 'Del', 'Delphini', 'Porpoise')
    DOR = ('Dorado', 'Dor', 'Doradus', 'Swordfish')
    DRA = ('Draco', 'Dra', 'Draconis', 'Dragon')
    EQU = ('Equuleus', 'Equ', 'Equulei', 'Little horse')
    ERI = ('Eridanus', 'Eri', 'Eridani', 'River')
    FOR = ('Fornax', 'For', 'Fornacis', 'Furnace')
    GEM = ('Gemini', 'Gem', 'Geminorum', 'Twins')
    GRU = ('Grus', 'Gru', 'Gruis', 'Crane')
    HER = ('Hercules', 'Her', 'Herculis', 'Hercules, son of Zeus')
    HOR = ('Horologium', 'Hor', 'Horologii', 'Clock')
    HYA = ('Hydra', 'Hya', 'Hydrae', 'Sea serpent')
    HYI = ('Hydrus', 'Hyi', 'Hydri', 'Water snake')
    IND = ('Indus', 'Ind', 'Indi', 'Indian')
    LAC = ('Lacerta', 'Lac', 'Lacertae', 'Lizard')
    LMI = ('Leo Minor', 'LMi', 'Leonis Minoris', 'Little lion')
    LEO = ('Leo', 'Leo', 'Leonis', 'Lion')
    LEP = ('Lepus', 'Lep', 'Leporis', 'Hare')
    LIB = ('Libra', 'Lib', 'Librae', 'Balance')
    LUP = ('Lupus', 'Lup', 'Lupi', 'Wolf')
    LYN = ('Lynx', 'Lyn', 'Lyncis', 'Lynx')
    LYR = ('Lyra', 'Lyr', 'Lyrae', 'Lyre')
    MEN = ('Mensa', 'Men', 'Mensae', 'Table mountain')
    MIC = ('Microscopium', 'Mic', 'Microscopii', 'Microscope')
    MON = ('Monoceros', 'Mon', 'Monocerotis', 'Unicorn')
    MUS = ('Musca', 'Mus', 'Muscae', 'Fly')
    NOR = ('Norma', 'Nor', 'Normae', "Carpenter's Level")
    OCT = ('Octans', 'Oct', 'Octantis', 'Octant')
    OPH = ('Ophiuchus', 'Oph', 'Ophiuchi', 'Holder of serpent')
    ORI = ('Orion', 'Ori', 'Orionis', 'Orion, the hunter')
    PAV = ('Pavo', 'Pav', 'Pavonis', 'Peacock')
    PEG = ('Pegasus', 'Peg', 'Pegasi', 'Pegasus, the winged horse')
    PER = ('Perseus', 'Per', 'Persei', 'Perseus, hero who saved Andromeda')
    PHE = ('Phoenix', 'Phe', 'Phoenicis', 'Phoenix')
    PIC = ('Pictor', 'Pic', 'Pictoris', 'Easel')
    PSC = ('Pisces', 'Psc', 'Piscium', 'Fishes')
    PSA = ('Piscis Austrinus', 'PsA', 'Piscis Austrini', 'Southern fish')
    PUP = ('Puppis', 'Pup', 'Puppis', "Stern of the Argonauts' ship")
    PYX = ('Pyxis', 'Pyx', 'Pyxidis', "Compass on the Argonauts' ship")
    RET = ('Reticulum', 'Ret', 'Reticuli', 'Net')
    SGE = ('Sagitta', 'Sge', 'Sagittae', 'Arrow')
    SGR = ('Sagittarius', 'Sgr', 'Sagittarii', 'Archer')
    SCO = ('Scorpius', 'Sco', 'Scorpii', 'Scorpion')
    SCL = ('Sculptor', 'Scl', 'Sculptoris', "Sculptor's tools")
    SCT = ('Scutum', 'Sct', 'Scuti', 'Shield')
    SER = ('Serpens', 'Ser', 'Serpentis', 'Serpent')
    SEX = ('Sextans', 'Sex', 'Sextantis', 'Sextant')
    TAU = ('Taurus', 'Tau', 'Tauri', 'Bull')
    TEL = ('Telescopium', 'Tel', 'Telescopii', 'Telescope')
    TRA = ('Triangulum Australe', 'TrA', 'Trianguli Australis', 'Southern triangle')
    TRI = ('Triangulum', 'Tri', 'Trianguli', 'Triangle')
    TUC = ('Tucana', 'Tuc', 'Tucanae', 'Toucan')
    UMA = ('Ursa Major', 'UMa', 'Ursae Majoris', 'Big bear')
    UMI = ('Ursa Minor', 'UMi', 'Ursae Minoris', 'Little bear')
    VEL = ('Vela', 'Vel', 'Velorum', "Sail of the Argonauts' ship")
    VIR = ('Virgo', 'Vir', 'Virginis', 'Virgin')
    VOL = ('Volans', 'Vol', 'Volantis', 'Flying fish')
    VUL = ('Vulpecula', 'Vul', 'Vulpeculae', 'Fox')

    @property
    def latin_name(self) -> str:
        return self.value[0]

    @property
    def iau(self) -> str:
        """Three-letter IAU abbreviation."""
        return self.value[1]

    @property
    def genitive(self) -> str:
        return self.value[2]

    @property
    def description(self) -> str:
        return self.value[3]


class BoundarySpan(NamedTuple):
    """One declination-sorted strip of the boundary table.

    Right ascensions are hours of the B1875.0 equinox; ``dec_low`` is the
    southern edge in degrees.
    """

    ra_low: float
    ra_high: float
    dec_low: float
    constellation: Constellation


# RA low, RA high (h:m:s), southern declination (d:m), constellation; north to south
_SPANS = (
    ('0:00:00', '24:00:00', '88:00', 'UMI'),
    ('8:00:00', '14:30:00', '86:30', 'UMI'),
    ('21:00:00', '23:00:00', '86:10', 'UMI'),
    ('18:00:00', '21:00:00', '86:00', 'UMI'),
    ('0:00:00', '8:00:00', '85:00', 'CEP'),
    ('9:10:00', '10:40:00', '82:00', 'CAM'),
    ('0:00:00', '5:00:00', '80:00', 'CEP'),
    ('10:40:00', '14:30:00', '80:00', 'CAM'),
    ('17:30:00', '18:00:00', '80:00', 'UMI'),
    ('20:10:00', '21:00:00', '80:00', 'DRA'),
    ('0:00:00', '3:30:30', '77:00', 'CEP'),
    ('11:30:00', '13:35:00', '77:00', 'CAM'),
    ('16:32:00', '17:30:00', '75:00', 'UMI'),
    ('20:10:00', '20:40:00', '75:00', 'CEP'),
    ('7:58:00', '9:10:00', '73:30', 'CAM'),
    ('9:10:00', '11:20:00', '73:30', 'DRA'),
    ('13:00:00', '16:32:00', '70:00', 'UMI'),
    ('3:06:00', '3:25:00', '68:00', 'CAS'),
    ('20:25:00', '20:40:00', '67:00', 'DRA'),
    ('11:20:00', '12:00:00', '66:30', 'DRA'),
    ('0:00:00', '0:20:00', '66:00', 'CEP'),
    ('14:00:00', '15:40:00', '66:00', 'UMI'),
    ('23:35:00', '24:00:00', '66:00', 'CEP'),
    ('12:00:00', '13:30:00', '64:00', 'DRA'),
    ('13:30:00', '14:25:00', '63:00', 'DRA'),
    ('23:10:00', '23:35:00', '63:00', 'CEP'),
    ('6:06:00', '7:00:00', '62:00', 'CAM'),
    ('20:00:00', '20:25:00', '61:30', 'DRA'),
    ('20:32:12', '20:36:00', '60:55', 'CEP'),
    ('7:00:00', '7:58:00', '60:00', 'CAM'),
    ('7:58:00', '8:25:00', '60:00', 'UMA'),
    ('19:46:00', '20:00:00', '59:30', 'DRA'),
    ('20:00:00', '20:32:12', '59:30', 'CEP'),
    ('22:52:00', '23:10:00', '59:05', 'CEP'),
    ('0:00:00', '2:26:00', '58:30', 'CAS'),
    ('19:25:00', '19:46:00', '58:00', 'DRA'),
    ('1:42:00', '1:54:30', '57:30', 'CAS'),
    ('2:26:00', '3:06:00', '57:00', 'CAS'),
    ('3:06:00', '3:10:00', '57:00', 'CAM'),
    ('22:19:00', '22:52:00', '56:15', 'CEP'),
    ('5:00:00', '6:06:00', '56:00', 'CAM'),
    ('14:02:00', '14:25:00', '55:30', 'UMA'),
    ('14:25:00', '19:25:00', '55:30', 'DRA'),
    ('3:10:00', '3:20:00', '55:00', 'CAM'),
    ('22:08:00', '22:19:00', '55:00', 'CEP'),
    ('20:36:00', '21:58:00', '54:50', 'CEP'),
    ('0:00:00', '1:42:00', '54:00', 'CAS'),
    ('6:06:00', '6:30:00', '54:00', 'LYN'),
    ('12:05:00', '13:30:00', '53:00', 'UMA'),
    ('15:15:00', '15:45:00', '53:00', 'DRA'),
    ('21:58:00', '22:08:00', '52:45', 'CEP'),
    ('3:20:00', '5:00:00', '52:30', 'CAM'),
    ('22:52:00', '23:20:00', '52:30', 'CAS'),
    ('15:45:00', '17:00:00', '51:30', 'DRA'),
    ('2:02:30', '2:31:00', '50:30', 'PER'),
    ('17:00:00', '18:14:00', '50:30', 'DRA'),
    ('0:00:00', '1:22:00', '50:00', 'CAS'),
    ('1:22:00', '1:40:00', '50:00', 'PER'),
    ('6:30:00', '6:48:00', '50:00', 'LYN'),
    ('23:20:00', '24:00:00', '50:00', 'CAS'),
    ('13:30:00', '14:02:00', '48:30', 'UMA'),
    ('0:00:00', '1:07:00', '48:00', 'CAS'),
    ('23:35:00', '24:00:00', '48:00', 'CAS'),
    ('18:10:30', '18:14:00', '47:30', 'HER'),
    ('18:14:00', '19:05:00', '47:30', 'DRA'),
    ('19:05:00', '19:10:00', '47:30', 'CYG'),
    ('1:40:00', '2:02:30', '47:00', 'PER'),
    ('8:25:00', '9:10:00', '47:00', 'UMA'),
    ('0:10:00', '0:52:00', '46:00', 'CAS'),
    ('12:00:00', '12:05:00', '45:00', 'UMA'),
    ('6:48:00', '7:22:00', '44:30', 'LYN'),
    ('21:54:30', '21:58:00', '44:00', 'CYG'),
    ('21:52:30', '21:54:30', '43:45', 'CYG'),
    ('19:10:00', '19:24:00', '43:30', 'CYG'),
    ('9:10:00', '10:10:00', '42:00', 'UMA'),
    ('10:10:00', '10:47:00', '40:00', 'UMA'),
    ('15:26:00', '15:45:00', '40:00', 'BOO'),
    ('15:45:00', '16:20:00', '40:00', 'HER'),
    ('9:15:00', '9:35:00', '39:45', 'LYN'),
    ('0:00:00', '2:31:00', '36:45', 'AND'),
    ('2:31:00', '2:34:00', '36:45', 'PER'),
    ('19:21:30', '19:24:00', '36:30', 'LYR'),
    ('4:30:00', '4:41:30', '36:00', 'PER'),
    ('21:44:00', '21:52:30', '36:00', 'CYG'),
    ('21:52:30', '22:00:00', '36:00', 'LAC'),
    ('6:32:00', '7:22:00', '35:30', 'AUR'),
    ('7:22:00', '7:45:00', '35:30', 'LYN'),
    ('0:00:00', '2:00:00', '35:00', 'AND'),
    ('22:00:00', '22:49:00', '35:00', 'LAC'),
    ('22:49:00', '22:52:00', '34:30', 'LAC'),
    ('22:52:00', '23:30:00', '34:30', 'AND'),
    ('2:34:00', '2:43:00', '34:00', 'PER'),
    ('10:47:00', '11:00:00', '34:00', 'UMA'),
    ('12:00:00', '12:20:00', '34:00', 'CVN'),
    ('7:45:00', '9:15:00', '33:30', 'LYN'),
    ('9:15:00', '9:53:00', '33:30', 'LMI'),
    ('0:43:00', '1:24:30', '33:00', 'AND'),
    ('15:11:00', '15:26:00', '33:00', 'BOO'),
    ('23:30:00', '23:45:00', '32:05', 'AND'),
    ('12:20:00', '13:15:00', '32:00', 'CVN'),
    ('23:45:00', '24:00:00', '31:20', 'AND'),
    ('13:57:30', '14:02:00', '30:45', 'CVN'),
    ('2:25:00', '2:43:00', '30:40', 'TRI'),
    ('2:43:00', '4:30:00', '30:40', 'PER'),
    ('4:30:00', '4:45:00', '30:00', 'AUR'),
    ('18:10:30', '19:21:30', '30:00', 'LYR'),
    ('11:00:00', '12:00:00', '29:00', 'UMA'),
    ('19:40:00', '20:55:00', '29:00', 'CYG'),
    ('4:45:00', '5:53:00', '28:30', 'AUR'),
    ('9:53:00', '10:30:00', '28:30', 'LMI'),
    ('13:15:00', '13:57:30', '28:30', 'CVN'),
    ('0:00:00', '0:04:00', '28:00', 'AND'),
    ('1:24:30', '1:40:00', '28:00', 'TRI'),
    ('5:53:00', '6:32:00', '28:00', 'AUR'),
    ('7:53:00', '8:00:00', '28:00', 'GEM'),
    ('20:55:00', '21:44:00', '28:00', 'CYG'),
    ('19:15:30', '19:40:00', '27:30', 'CYG'),
    ('1:55:00', '2:25:00', '27:15', 'TRI'),
    ('16:10:00', '16:20:00', '27:00', 'CRB'),
    ('15:05:00', '15:11:00', '26:00', 'BOO'),
    ('15:11:00', '16:10:00', '26:00', 'CRB'),
    ('18:22:00', '18:52:00', '26:00', 'LYR'),
    ('10:45:00', '11:00:00', '25:30', 'LMI'),
    ('18:52:00', '19:15:30', '25:30', 'LYR'),
    ('1:40:00', '1:55:00', '25:00', 'TRI'),
    ('0:43:00', '0:51:00', '23:45', 'PSC'),
    ('10:30:00', '10:45:00', '23:30', 'LMI'),
    ('21:15:00', '21:25:00', '23:30', 'VUL'),
    ('5:42:00', '5:53:00', '22:50', 'TAU'),
    ('0:04:00', '0:08:30', '22:00', 'AND'),
    ('15:55:00', '16:02:00', '22:00', 'SER'),
    ('5:53:00', '6:13:00', '21:30', 'GEM'),
    ('19:50:00', '20:15:00', '21:15', 'VUL'),
    ('18:52:00', '19:15:00', '21:05', 'VUL'),
    ('0:08:30', '0:51:00', '21:00', 'AND'),
    ('20:15:00', '20:34:00', '20:30', 'VUL'),
    ('7:48:30', '7:53:00', '20:00', 'GEM'),
    ('20:34:00', '21:15:00', '19:30', 'VUL'),
    ('19:15:00', '19:50:00', '19:10', 'VUL'),
    ('3:17:00', '3:22:00', '19:00', 'ARI'),
    ('18:52:00', '19:00:00', '18:30', 'SGE'),
    ('5:42:00', '5:46:00', '18:00', 'ORI'),
    ('6:13:00', '6:18:30', '17:30', 'GEM'),
    ('19:00:00', '19:50:00', '16:10', 'SGE'),
    ('4:58:00', '5:20:00', '16:00', 'TAU'),
    ('15:55:00', '16:05:00', '16:00', 'HER'),
    ('19:50:00', '20:15:00', '15:45', 'SGE'),
    ('4:37:00', '4:58:00', '15:30', 'TAU'),
    ('5:20:00', '5:36:00', '15:30', 'TAU'),
    ('12:50:00', '13:30:00', '15:00', 'COM'),
    ('17:15:00', '18:15:00', '14:20', 'HER'),
    ('11:52:00', '12:50:00', '14:00', 'COM'),
    ('7:30:00', '7:48:30', '13:30', 'GEM'),
    ('16:45:00', '17:15:00', '12:50', 'HER'),
    ('0:00:00', '0:08:30', '12:30', 'PEG'),
    ('5:36:00', '5:46:00', '12:30', 'TAU'),
    ('7:00:00', '7:30:00', '12:30', 'GEM'),
    ('21:07:00', '21:20:00', '12:30', 'PEG'),
    ('6:18:30', '6:56:00', '12:00', 'GEM'),
    ('18:15:00', '18:52:00', '12:00', 'HER'),
    ('20:52:30', '21:03:00', '11:50', 'DEL'),
    ('21:03:00', '21:07:00', '11:50', 'PEG'),
    ('11:31:00', '11:52:00', '11:00', 'LEO'),
    ('6:14:30', '6:18:30', '10:00', 'ORI'),
    ('6:56:00', '7:00:00', '10:00', 'GEM'),
    ('7:48:30', '7:55:30', '10:00', 'CNC'),
    ('23:50:00', '24:00:00', '10:00', 'PEG'),
    ('1:40:00', '3:17:00', '9:55', 'ARI'),
    ('20:08:30', '20:18:00', '8:30', 'DEL'),
    ('13:30:00', '15:05:00', '8:00', 'BOO'),
    ('22:45:00', '23:50:00', '7:30', 'PEG'),
    ('7:55:30', '9:15:00', '7:00', 'CNC'),
    ('9:15:00', '10:45:00', '7:00', 'LEO'),
    ('18:15:00', '18:39:44', '6:15', 'OPH'),
    ('18:39:44', '18:52:00', '6:15', 'AQL'),
    ('20:50:00', '20:52:30', '6:00', 'DEL'),
    ('7:00:00', '7:01:00', '5:30', 'CMI'),
    ('18:15:00', '18:25:30', '4:30', 'SER'),
    ('16:05:00', '16:45:00', '4:00', 'HER'),
    ('18:15:00', '18:25:30', '3:00', 'OPH'),
    ('21:28:00', '21:40:00', '2:45', 'PEG'),
    ('0:00:00', '2:00:00', '2:00', 'PSC'),
    ('18:35:00', '18:52:00', '2:00', 'SER'),
    ('20:18:00', '20:50:00', '2:00', 'DEL'),
    ('20:50:00', '21:20:00', '2:00', 'EQU'),
    ('21:20:00', '21:28:00', '2:00', 'PEG'),
    ('22:00:00', '22:45:00', '2:00', 'PEG'),
    ('21:40:00', '22:00:00', '1:45', 'PEG'),
    ('7:01:00', '7:12:00', '1:30', 'CMI'),
    ('3:35:00', '4:37:00', '0:00', 'TAU'),
    ('4:37:00', '4:40:00', '0:00', 'ORI'),
    ('7:12:00', '8:05:00', '0:00', 'CMI'),
    ('14:40:00', '15:05:00', '0:00', 'VIR'),
    ('17:50:00', '18:15:00', '0:00', 'OPH'),
    ('2:39:00', '3:17:00', '-1:45', 'CET'),
    ('3:17:00', '3:35:00', '-1:45', 'TAU'),
    ('15:05:00', '16:16:00', '-3:15', 'SER'),
    ('4:40:00', '5:05:00', '-4:00', 'ORI'),
    ('5:50:00', '6:14:30', '-4:00', 'ORI'),
    ('17:50:00', '17:58:00', '-4:00', 'SER'),
    ('18:15:00', '18:35:00', '-4:00', 'SER'),
    ('18:35:00', '18:52:00', '-4:00', 'AQL'),
    ('22:45:00', '23:50:00', '-4:00', 'PSC'),
    ('10:45:00', '11:31:00', '-6:00', 'LEO'),
    ('11:31:00', '11:50:00', '-6:00', 'VIR'),
    ('0:00:00', '0:20:00', '-7:00', 'PSC'),
    ('23:50:00', '24:00:00', '-7:00', 'PSC'),
    ('14:15:00', '14:40:00', '-8:00', 'VIR'),
    ('15:55:00', '16:16:00', '-8:00', 'OPH'),
    ('20:00:00', '20:32:00', '-9:00', 'AQL'),
    ('21:20:00', '21:52:00', '-9:00', 'AQR'),
    ('17:10:00', '17:58:00', '-10:00', 'OPH'),
    ('5:50:00', '8:05:00', '-11:00', 'MON'),
    ('4:55:00', '5:05:00', '-11:00', 'ERI'),
    ('5:05:00', '5:50:00', '-11:00', 'ORI'),
    ('8:05:00', '8:22:00', '-11:00', 'HYA'),
    ('9:35:00', '10:45:00', '-11:00', 'SEX'),
    ('11:50:00', '12:50:00', '-11:00', 'VIR'),
    ('17:35:00', '17:40:00', '-11:40', 'OPH'),
    ('18:52:00', '20:00:00', '-12:02', 'AQL'),
    ('4:50:00', '4:55:00', '-14:30', 'ERI'),
    ('20:32:00', '21:20:00', '-15:00', 'AQR'),
    ('17:10:00', '18:15:00', '-16:00', 'SER'),
    ('18:15:00', '18:52:00', '-16:00', 'SCT'),
    ('8:22:00', '8:35:00', '-17:00', 'HYA'),
    ('16:16:00', '16:22:30', '-18:15', 'OPH'),
    ('8:35:00', '9:05:00', '-19:00', 'HYA'),
    ('10:45:00', '10:50:00', '-19:00', 'CRT'),
    ('16:16:00', '16:22:30', '-19:15', 'SCO'),
    ('15:40:00', '15:55:00', '-20:00', 'LIB'),
    ('12:35:00', '12:50:00', '-22:00', 'CRV'),
    ('12:50:00', '14:15:00', '-22:00', 'VIR'),
    ('9:05:00', '9:45:00', '-24:00', 'HYA'),
    ('1:40:00', '2:39:00', '-24:23', 'CET'),
    ('2:39:00', '3:45:00', '-24:23', 'ERI'),
    ('10:50:00', '11:50:00', '-24:30', 'CRT'),
    ('11:50:00', '12:35:00', '-24:30', 'CRV'),
    ('14:15:00', '14:55:00', '-24:30', 'LIB'),
    ('16:16:00', '16:45:00', '-24:35', 'OPH'),
    ('0:00:00', '1:40:00', '-25:30', 'CET'),
    ('21:20:00', '21:52:00', '-25:30', 'CAP'),
    ('21:52:00', '23:50:00', '-25:30', 'AQR'),
    ('23:50:00', '24:00:00', '-25:30', 'CET'),
    ('9:45:00', '10:15:00', '-26:30', 'HYA'),
    ('4:42:00', '4:50:00', '-27:15', 'ERI'),
    ('4:50:00', '6:07:00', '-27:15', 'LEP'),
    ('20:00:00', '21:20:00', '-28:00', 'CAP'),
    ('10:15:00', '10:35:00', '-29:10', 'HYA'),
    ('12:35:00', '14:55:00', '-29:30', 'HYA'),
    ('14:55:00', '15:40:00', '-29:30', 'LIB'),
    ('15:40:00', '16:00:00', '-29:30', 'SCO'),
    ('4:35:00', '4:42:00', '-30:00', 'ERI'),
    ('16:45:00', '17:36:00', '-30:00', 'OPH'),
    ('17:36:00', '17:50:00', '-30:00', 'SGR'),
    ('10:35:00', '10:50:00', '-31:10', 'HYA'),
    ('6:07:00', '7:22:00', '-33:00', 'CMA'),
    ('12:15:00', '12:35:00', '-33:00', 'HYA'),
    ('10:50:00', '12:15:00', '-35:00', 'HYA'),
    ('3:30:00', '3:45:00', '-36:00', 'FOR'),
    ('8:22:00', '9:22:00', '-36:45', 'PYX'),
    ('4:16:00', '4:35:00', '-37:00', 'ERI'),
    ('17:50:00', '19:10:00', '-37:00', 'SGR'),
    ('21:20:00', '23:00:00', '-37:00', 'PSA'),
    ('23:00:00', '23:20:00', '-37:00', 'SCL'),
    ('3:00:00', '3:30:00', '-39:35', 'FOR'),
    ('9:22:00', '11:00:00', '-39:45', 'ANT'),
    ('0:00:00', '1:40:00', '-40:00', 'SCL'),
    ('1:40:00', '3:00:00', '-40:00', 'FOR'),
    ('3:52:00', '4:16:00', '-40:00', 'ERI'),
    ('23:20:00', '24:00:00', '-40:00', 'SCL'),
    ('14:10:00', '14:55:00', '-42:00', 'CEN'),
    ('15:40:00', '16:00:00', '-42:00', 'LUP'),
    ('16:00:00', '16:25:15', '-42:00', 'SCO'),
    ('4:50:00', '5:00:00', '-43:00', 'CAE'),
    ('5:00:00', '6:35:00', '-43:00', 'COL'),
    ('8:00:00', '8:22:00', '-43:00', 'PUP'),
    ('3:25:00', '3:52:00', '-44:00', 'ERI'),
    ('16:25:15', '17:50:00', '-45:30', 'SCO'),
    ('17:50:00', '19:10:00', '-45:30', 'CRA'),
    ('19:10:00', '20:20:00', '-45:30', 'SGR'),
    ('20:20:00', '21:20:00', '-45:30', 'MIC'),
    ('3:00:00', '3:25:00', '-46:00', 'ERI'),
    ('4:30:00', '4:50:00', '-46:30', 'CAE'),
    ('15:20:00', '15:40:00', '-48:00', 'LUP'),
    ('0:00:00', '2:20:00', '-48:10', 'PHE'),
    ('2:40:00', '3:00:00', '-49:00', 'ERI'),
    ('4:05:00', '4:16:00', '-49:00', 'HOR'),
    ('4:16:00', '4:30:00', '-49:00', 'CAE'),
    ('21:20:00', '22:00:00', '-50:00', 'GRU'),
    ('6:00:00', '8:00:00', '-50:45', 'PUP'),
    ('8:00:00', '8:10:00', '-50:45', 'VEL'),
    ('2:25:00', '2:40:00', '-51:00', 'ERI'),
    ('3:50:00', '4:05:00', '-51:00', 'HOR'),
    ('0:00:00', '1:50:00', '-51:30', 'PHE'),
    ('6:00:00', '6:10:00', '-52:30', 'CAR'),
    ('8:10:00', '8:27:00', '-53:00', 'VEL'),
    ('3:30:00', '3:50:00', '-53:10', 'HOR'),
    ('3:50:00', '4:00:00', '-53:10', 'DOR'),
    ('0:00:00', '1:35:00', '-53:30', 'PHE'),
    ('2:10:00', '2:25:00', '-54:00', 'ERI'),
    ('4:30:00', '5:00:00', '-54:00', 'PIC'),
    ('15:03:00', '15:20:00', '-54:00', 'LUP'),
    ('8:27:00', '8:50:00', '-54:30', 'VEL'),
    ('6:10:00', '6:30:00', '-55:00', 'CAR'),
    ('11:50:00', '12:50:00', '-55:00', 'CEN'),
    ('14:10:00', '15:03:00', '-55:00', 'LUP'),
    ('15:03:00', '15:20:00', '-55:00', 'NOR'),
    ('4:00:00', '4:20:00', '-56:30', 'DOR'),
    ('8:50:00', '11:00:00', '-56:30', 'VEL'),
    ('11:00:00', '11:15:00', '-56:30', 'CEN'),
    ('17:30:00', '18:00:00', '-57:00', 'ARA'),
    ('18:00:00', '20:20:00', '-57:00', 'TEL'),
    ('22:00:00', '23:20:00', '-57:00', 'GRU'),
    ('3:12:00', '3:30:00', '-57:30', 'HOR'),
    ('5:00:00', '5:30:00', '-57:30', 'PIC'),
    ('6:30:00', '6:50:00', '-58:00', 'CAR'),
    ('0:00:00', '1:20:00', '-58:30', 'PHE'),
    ('1:20:00', '2:10:00', '-58:30', 'ERI'),
    ('23:20:00', '24:00:00', '-58:30', 'PHE'),
    ('4:20:00', '4:35:00', '-59:00', 'DOR'),
    ('15:20:00', '16:25:15', '-60:00', 'NOR'),
    ('20:20:00', '21:20:00', '-60:00', 'IND'),
    ('5:30:00', '6:00:00', '-61:00', 'PIC'),
    ('15:10:00', '15:20:00', '-61:00', 'CIR'),
    ('16:25:15', '16:35:00', '-61:00', 'ARA'),
    ('14:55:00', '15:10:00', '-63:35', 'CIR'),
    ('16:35:00', '16:45:00', '-63:35', 'ARA'),
    ('6:00:00', '6:50:00', '-64:00', 'PIC'),
    ('6:50:00', '9:02:00', '-64:00', 'CAR'),
    ('11:15:00', '11:50:00', '-64:00', 'CEN'),
    ('11:50:00', '12:50:00', '-64:00', 'CRU'),
    ('12:50:00', '14:32:00', '-64:00', 'CEN'),
    ('13:30:00', '13:40:00', '-65:00', 'CIR'),
    ('16:45:00', '16:50:00', '-65:00', 'ARA'),
    ('2:10:00', '3:12:00', '-67:30', 'HOR'),
    ('3:12:00', '4:35:00', '-67:30', 'RET'),
    ('14:45:00', '14:55:00', '-67:30', 'CIR'),
    ('16:50:00', '17:30:00', '-67:30', 'ARA'),
    ('17:30:00', '18:00:00', '-67:30', 'PAV'),
    ('22:00:00', '23:20:00', '-67:30', 'TUC'),
    ('4:35:00', '6:35:00', '-70:00', 'DOR'),
    ('13:40:00', '14:45:00', '-70:00', 'CIR'),
    ('14:45:00', '17:00:00', '-70:00', 'TRA'),
    ('0:00:00', '1:20:00', '-75:00', 'TUC'),
    ('3:30:00', '4:35:00', '-75:00', 'HYI'),
    ('6:35:00', '9:02:00', '-75:00', 'VOL'),
    ('9:02:00', '11:15:00', '-75:00', 'CAR'),
    ('11:15:00', '13:40:00', '-75:00', 'MUS'),
    ('18:00:00', '21:20:00', '-75:00', 'PAV'),
    ('21:20:00', '23:20:00', '-75:00', 'IND'),
    ('23:20:00', '24:00:00', '-75:00', 'TUC'),
    ('0:45:00', '1:20:00', '-76:00', 'TUC'),
    ('0:00:00', '3:30:00', '-82:30', 'HYI'),
    ('7:40:00', '13:40:00', '-82:30', 'CHA'),
    ('13:40:00', '18:00:00', '-82:30', 'APS'),
    ('3:30:00', '7:40:00', '-85:00', 'MEN'),
    ('0:00:00', '24:00:00', '-90:00', 'OCT'),
)


def _parse_hms(text: str) -> float:
    h, m, s = (int(part) for part in text.split(':'))
    return h + m / 60.0 + s / 3600.0


def _parse_dm(text: str) -> float:
    d, m = text.split(':')
    sign = -1.0 if d.startswith('-') else 1.0
    return sign * (abs(int(d)) + int(m) / 60.0)


@lru_cache(maxsize=1)
def boundaries() -> tuple[BoundarySpan, ...]:
    """The boundary table, sorted by decreasing southern declination."""
    return tuple(
        BoundarySpan(
            _parse_hms(ra_low), _parse_hms(ra_high), _parse_dm(dec_low), Constellation[abbr]
        )
        for ra_low, ra_high, dec_low, abbr in _SPANS
    )


@lru_cache(maxsize=1)
def j2000_to_b1875() -> Matrix4:
    """Rotation from J2000 equatorial to the mean equator and equinox of B1875.0."""
    prec = compute_vondrak(JulianDay.from_besselian_epoch(1875.0).value)
    return (
        Matrix4.xrotation(_BOUNDARY_OBLIQUITY_ARCSEC * ARCSEC_TO_RAD)
        @ Matrix4.zrotation(-prec.psi)
        @ Matrix4.xrotation(-prec.omega)
        @ Matrix4.zrotation(prec.chi)
    ).transpose()


def find_b1875(ra_hours: float, dec_deg: float) -> Constellation:
    """Constellation containing a B1875.0 position.

    Parameters:
        ra_hours: Right ascension of B1875.0 in hours, [0, 24).
        dec_deg: Declination of B1875.0 in degrees.

    Returns:
        The Constellation whose boundary strip contains the position.

    Raises:
        ValueError: If no strip contains the position (declination below -90).
    """
    for span in boundaries():
        if span.dec_low <= dec_deg and span.ra_low <= ra_hours < span.ra_high:
            return span.constellation
    raise ValueError(f'No constellation contains RA {ra_hours} h, Dec {dec_deg} deg')


def find(o: Observer, pos_equinox_of_date: Vector3) -> Constellation:
    """Constellation containing a position on the equator and equinox of date.

    Parameters:
        o: Observer whose frame the position is expressed in.
        pos_equinox_of_date: Rectangular position, equator and equinox of date.

    Returns:
        The Constellation seen in that direction.
    """
    pos = j2000_to_b1875() @ o.equinox_equatorial_to_j2000(pos_equinox_of_date, False)
    ra_hours = math.degrees(normalize_radians(pos.longitude())) / 15.0
    return find_b1875(ra_hours % 24.0, math.degrees(pos.latitude()))
