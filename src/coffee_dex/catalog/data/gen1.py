"""Generation 1 candidate pool with current type assignments.

Each entry is (id, name, types). Types are slash-separated category tags,
primary tag first.
"""

CANDIDATES = [
    (1, "Bulbasaur", "grass/poison"),
    (2, "Ivysaur", "grass/poison"),
    (3, "Venusaur", "grass/poison"),
    (4, "Charmander", "fire"),
    (5, "Charmeleon", "fire"),
    (6, "Charizard", "fire/flying"),
    (7, "Squirtle", "water"),
    (8, "Wartortle", "water"),
    (9, "Blastoise", "water"),
    (10, "Caterpie", "bug"),
    (11, "Metapod", "bug"),
    (12, "Butterfree", "bug/flying"),
    (13, "Weedle", "bug/poison"),
    (14, "Kakuna", "bug/poison"),
    (15, "Beedrill", "bug/poison"),
    (16, "Pidgey", "normal/flying"),
    (17, "Pidgeotto", "normal/flying"),
    (18, "Pidgeot", "normal/flying"),
    (19, "Rattata", "normal"),
    (20, "Raticate", "normal"),
    (21, "Spearow", "normal/flying"),
    (22, "Fearow", "normal/flying"),
    (23, "Ekans", "poison"),
    (24, "Arbok", "poison"),
    (25, "Pikachu", "electric"),
    (26, "Raichu", "electric"),
    (27, "Sandshrew", "ground"),
    (28, "Sandslash", "ground"),
    (29, "Nidoran F", "poison"),
    (30, "Nidorina", "poison"),
    (31, "Nidoqueen", "poison/ground"),
    (32, "Nidoran M", "poison"),
    (33, "Nidorino", "poison"),
    (34, "Nidoking", "poison/ground"),
    (35, "Clefairy", "fairy"),
    (36, "Clefable", "fairy"),
    (37, "Vulpix", "fire"),
    (38, "Ninetales", "fire"),
    (39, "Jigglypuff", "normal/fairy"),
    (40, "Wigglytuff", "normal/fairy"),
    (41, "Zubat", "poison/flying"),
    (42, "Golbat", "poison/flying"),
    (43, "Oddish", "grass/poison"),
    (44, "Gloom", "grass/poison"),
    (45, "Vileplume", "grass/poison"),
    (46, "Paras", "bug/grass"),
    (47, "Parasect", "bug/grass"),
    (48, "Venonat", "bug/poison"),
    (49, "Venomoth", "bug/poison"),
    (50, "Diglett", "ground"),
    (51, "Dugtrio", "ground"),
    (52, "Meowth", "normal"),
    (53, "Persian", "normal"),
    (54, "Psyduck", "water"),
    (55, "Golduck", "water"),
    (56, "Mankey", "fighting"),
    (57, "Primeape", "fighting"),
    (58, "Growlithe", "fire"),
    (59, "Arcanine", "fire"),
    (60, "Poliwag", "water"),
    (61, "Poliwhirl", "water"),
    (62, "Poliwrath", "water/fighting"),
    (63, "Abra", "psychic"),
    (64, "Kadabra", "psychic"),
    (65, "Alakazam", "psychic"),
    (66, "Machop", "fighting"),
    (67, "Machoke", "fighting"),
    (68, "Machamp", "fighting"),
    (69, "Bellsprout", "grass/poison"),
    (70, "Weepinbell", "grass/poison"),
    (71, "Victreebel", "grass/poison"),
    (72, "Tentacool", "water/poison"),
    (73, "Tentacruel", "water/poison"),
    (74, "Geodude", "rock/ground"),
    (75, "Graveler", "rock/ground"),
    (76, "Golem", "rock/ground"),
    (77, "Ponyta", "fire"),
    (78, "Rapidash", "fire"),
    (79, "Slowpoke", "water/psychic"),
    (80, "Slowbro", "water/psychic"),
    (81, "Magnemite", "electric/steel"),
    (82, "Magneton", "electric/steel"),
    (83, "Farfetch'd", "normal/flying"),
    (84, "Doduo", "normal/flying"),
    (85, "Dodrio", "normal/flying"),
    (86, "Seel", "water"),
    (87, "Dewgong", "water/ice"),
    (88, "Grimer", "poison"),
    (89, "Muk", "poison"),
    (90, "Shellder", "water"),
    (91, "Cloyster", "water/ice"),
    (92, "Gastly", "ghost/poison"),
    (93, "Haunter", "ghost/poison"),
    (94, "Gengar", "ghost/poison"),
    (95, "Onix", "rock/ground"),
    (96, "Drowzee", "psychic"),
    (97, "Hypno", "psychic"),
    (98, "Krabby", "water"),
    (99, "Kingler", "water"),
    (100, "Voltorb", "electric"),
    (101, "Electrode", "electric"),
    (102, "Exeggcute", "grass/psychic"),
    (103, "Exeggutor", "grass/psychic"),
    (104, "Cubone", "ground"),
    (105, "Marowak", "ground"),
    (106, "Hitmonlee", "fighting"),
    (107, "Hitmonchan", "fighting"),
    (108, "Lickitung", "normal"),
    (109, "Koffing", "poison"),
    (110, "Weezing", "poison"),
    (111, "Rhyhorn", "ground/rock"),
    (112, "Rhydon", "ground/rock"),
    (113, "Chansey", "normal"),
    (114, "Tangela", "grass"),
    (115, "Kangaskhan", "normal"),
    (116, "Horsea", "water"),
    (117, "Seadra", "water"),
    (118, "Goldeen", "water"),
    (119, "Seaking", "water"),
    (120, "Staryu", "water"),
    (121, "Starmie", "water/psychic"),
    (122, "Mr. Mime", "psychic/fairy"),
    (123, "Scyther", "bug/flying"),
    (124, "Jynx", "ice/psychic"),
    (125, "Electabuzz", "electric"),
    (126, "Magmar", "fire"),
    (127, "Pinsir", "bug"),
    (128, "Tauros", "normal"),
    (129, "Magikarp", "water"),
    (130, "Gyarados", "water/flying"),
    (131, "Lapras", "water/ice"),
    (132, "Ditto", "normal"),
    (133, "Eevee", "normal"),
    (134, "Vaporeon", "water"),
    (135, "Jolteon", "electric"),
    (136, "Flareon", "fire"),
    (137, "Porygon", "normal"),
    (138, "Omanyte", "rock/water"),
    (139, "Omastar", "rock/water"),
    (140, "Kabuto", "rock/water"),
    (141, "Kabutops", "rock/water"),
    (142, "Aerodactyl", "rock/flying"),
    (143, "Snorlax", "normal"),
    (144, "Articuno", "ice/flying"),
    (145, "Zapdos", "electric/flying"),
    (146, "Moltres", "fire/flying"),
    (147, "Dratini", "dragon"),
    (148, "Dragonair", "dragon"),
    (149, "Dragonite", "dragon/flying"),
    (150, "Mewtwo", "psychic"),
    (151, "Mew", "psychic"),
]
