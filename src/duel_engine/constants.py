# =============================================================================
# STAT STAGES
# =============================================================================
MIN_STAT_STAGE = -6
MAX_STAT_STAGE = 6

# Attack / defense / special / speed multiplier, indexed by stage + 6
STAGE_MULTIPLIERS = [2 / 8, 2 / 7, 2 / 6, 2 / 5, 2 / 4, 2 / 3, 1, 1.5, 2, 2.5, 3, 3.5, 4]

# Accuracy multiplier, indexed by (accuracy stage - evasion stage) + 6
ACCURACY_STAGE_MULTIPLIERS = [3 / 9, 3 / 8, 3 / 7, 3 / 6, 3 / 5, 3 / 4, 1, 4 / 3, 5 / 3, 2, 7 / 3, 8 / 3, 3]

# =============================================================================
# CRITICAL HITS
# =============================================================================
# One in N chance per crit stage; stages above 3 are clamped
CRIT_ODDS = [24, 8, 2, 1]
MAX_CRIT_STAGE = 3
CRIT_MULTIPLIER = 1.5

# =============================================================================
# MULTI-HIT
# =============================================================================
# 2-5 hit moves: 35% / 35% / 15% / 15%
MULTI_HIT_TABLE = [2] * 7 + [3] * 7 + [4] * 3 + [5] * 3

# =============================================================================
# MISC
# =============================================================================
PARTY_SIZE = 6
MAX_MOVES = 4
DEFAULT_PROTECTION_CHANCE = 1
MAX_PROTECTION_CHANCE = 729  # 3 ** 6
MAX_USE_DEPTH = 8

# =============================================================================
# NARRATION TEMPLATES
# =============================================================================
# tag -> str.format template. "{source}" renders as " from <source>" when a source is given.
MESSAGES: dict[str, str] = {
    # HP
    "took_damage": "{name} took {amount} damage{source}!",
    "healed": "{name} healed {amount} hp{source}!",
    "fainted": "{name} fainted{source}!",
    "substitute_damage": "{name}'s substitute took {amount} damage{source}!",
    "substitute_broke": "{name}'s substitute broke!",
    "magic_guard": "{name}'s magic guard protected it from damage!",
    "disguise_busted": "{name}'s disguise was busted!",
    "ice_face_busted": "{name}'s ice face was busted!",
    "endured": "{name} endured the hit!",
    "endured_sturdy": "{name} endured the hit with its Sturdy!",
    "held_on": "{name} held on using its {item}!",
    "battle_bond": "{name} transformed into Ash-Greninja!",
    "grudge": "{move}'s pp was depleted!",
    "wimped_out": "{name} wimped out and retreated!",
    "emergency_exit": "{name} used the emergency exit and retreated!",
    # Reactions to being hit
    "thawed": "{name} thawed out!",
    "color_change": "{name} changed its color, transforming into a {type} type!",
    "charged_by": "{name} became charged due to its {ability}!",
    "toxic_debris": "Toxic spikes were scattered around the feet of {side}'s team because of {name}'s toxic debris!",
    "illusion_broke": "{name}'s illusion broke!",
    "air_balloon_popped": "{name}'s air balloon popped!",
    "aroma_veil_disable": "{name}'s aroma veil protects its move from being disabled!",
    "cursed_body": "{name}'s {move} was disabled by {other}'s cursed body!",
    "magician": "{name} stole a {item} using its magician!",
    "sticky_hold": "{name}'s sticky hand kept hold of its item!",
    "item_stolen": "{name}'s {item} was stolen!",
    "gained_ability": "{name} gained the ability {ability} from {other}!",
    "acquired_ability": "{name} acquired {ability}!",
    "perish_body": "All pokemon will faint after 3 turns from {name}'s perish body!",
    "wandering_spirit": "{name} swapped abilities with {other} because of {other}'s wandering spirit!",
    # Stat stages
    "stat_fell_severely": "{name}'s {stat} severely fell{source}!",
    "stat_fell_harshly": "{name}'s {stat} harshly fell{source}!",
    "stat_fell": "{name}'s {stat} fell{source}!",
    "stat_rose": "{name}'s {stat} rose{source}!",
    "stat_rose_sharply": "{name}'s {stat} sharply rose{source}!",
    "stat_rose_drastically": "{name}'s {stat} drastically rose{source}!",
    "stat_wont_go_lower": "{name}'s {stat} won't go any lower!",
    "stat_wont_go_higher": "{name}'s {stat} won't go any higher!",
    "stat_drop_prevented": "{name}'s {ability} prevented its {stat} from being lowered!",
    "hyper_cutter": "{name}'s claws stayed sharp because of its hyper cutter!",
    "aim_stayed_true": "{name}'s aim stayed true because of its {ability}!",
    "big_pecks": "{name}'s defense stayed strong because of its big pecks!",
    "mist_prevented": "The mist around {name}'s feet prevented its {stat} from being lowered!",
    "mirror_armor": "{name}'s mirror armor reflected the stat change!",
    "eject_pack": "{name} is switched out by the eject pack!",
    "opportunist": "{name} seizes the opportunity to boost its stat with its opportunist!",
    # Non-volatile status
    "already_has_status": "{name} already has a status, it can't get {status} too!",
    "status_protected_by": "{name}'s {protector} prevents it from getting {status}!",
    "misty_terrain_status": "The misty terrain prevents {name} from getting {status}!",
    "minior_shell": "Minior's hard shell protects it from status effects!",
    "type_immune_status": "{name} is {article} {type} type and can't be {verb}!",
    "ability_prevents_burn": "{name}'s {ability} prevents it from getting burned!",
    "keeps_awake": "{name}'s {ability} keeps it awake!",
    "electric_terrain_sleep": "The electric terrain keeps {name} from falling asleep!",
    "uproar_sleep": "The uproar prevents {name} from falling asleep!",
    "keeps_from_poison": "{name}'s {ability} keeps it from being poisoned!",
    "limber": "{name}'s limber keeps it from being paralyzed!",
    "magma_armor": "{name}'s magma armor keeps it from being frozen!",
    "too_sunny_to_freeze": "It's too sunny to freeze {name}!",
    "burned": "{name} was burned{source}!",
    "fell_asleep": "{name} fell asleep{source}!",
    "poisoned": "{name} was poisoned{source}!",
    "badly_poisoned": "{name} was badly poisoned{source}!",
    "paralyzed": "{name} is paralyzed{source}! It may be unable to move!",
    "frozen": "{name} was frozen solid{source}!",
    "natural_cure": "{name}'s {status} was cured by its natural cure!",
    # Volatile conditions
    "confused": "{name} is confused{source}!",
    "inner_focus": "{name} won't flinch because of its inner focus!",
    "flinched": "{name} flinched{source}!",
    "too_oblivious_for_love": "{name} is too oblivious to fall in love!",
    "aroma_veil_love": "{name}'s aroma veil protects it from being infatuated!",
    "fell_in_love": "{name} fell in love{source}!",
    # Berries
    "eats_berry": "{name} eats {other}'s berry!",
    "powered_up_by_berry": "{name} is powered up by eating its berry.",
    "berry_cured": "{name} {cure}!",
    "berry_no_effect": "{name}'s berry had no effect!",
    "lum_berry": "{name}'s lum berry cured its status!",
    # Entering and leaving the field
    "i_choose_you": "{name}, I choose you!",
    "sent_out": "{side} sent out {name}!",
    "baton_pass_received": "{name} carries on the baton!",
    "absorbed_toxic_spikes": "{name} absorbed the toxic spikes!",
    "healing_wish_restored": "{name} was restored by healing wish!",
    "lunar_dance_restored": "{name} was restored by lunar dance!",
    "air_balloon": "{name} floats in the air with its air balloon!",
    "transformed_into": "{name} transformed into {species}!",
    "breaks_the_mold": "{name} breaks the mold!",
    "radiating_aura": "{name} is radiating a {aura} aura!",
    "intimidate_oblivious": "{name} is too oblivious to be intimidated!",
    "intimidate_own_tempo": "{name} keeps walking on its own tempo, and is not intimidated!",
    "intimidate_inner_focus": "{name} is focused and will not be intimidated!",
    "intimidate_scrappy": "{name} doesn't care about that!",
    "intimidate_guard_dog": "{name}'s guard dog keeps it from being intimidated!",
    "screen_cleaner": "{name}'s screen cleaner removed all screens from the field!",
    "traced": "{name} traced {other}'s ability!",
    "anticipation": "{name} shuddered in anticipation!",
    "forewarn": "{name} is forewarned about {other}'s {move}!",
    "frisk": "{name} frisked {other} and found a {item}!",
    "type_transformed": "{name} transformed into a {type} type using its {ability}!",
    "mimicry_transformed": "{name} became a {type} type using its mimicry!",
    "ready_to_be_a_hero": "{name} is ready to be a hero!",
    # Weather and terrain
    "weather_hail": "It starts to hail!",
    "weather_sandstorm": "A sandstorm is brewing up!",
    "weather_rain": "It starts to rain!",
    "weather_sun": "The sunlight is strong!",
    "weather_heavy_rain": "Heavy rain begins to fall!",
    "weather_harsh_sun": "The sunlight is extremely harsh!",
    "weather_strong_winds": "The winds are extremely strong!",
    "weather_cleared": "The weather cleared!",
    "terrain_already": "There's already a {terrain} terrain!",
    "terrain_created": "{name} creates {article} {terrain} terrain!",
    "terrain_cleared": "The terrain returned to normal!",
    # Using a move
    "used_move": "{name} used {move}!",
    "but_it_failed": "But it failed!",
    "ran_out_of_pp": "It ran out of PP!",
    "snatched_move": "{name} snatched the move!",
    "reflected": "{name} reflected the move back!",
    "draws_blade": "{name} draws its blade!",
    "readies_shield": "{name} readies its shield!",
    "cant_use_move": "But {name} can't use the move!",
    "charging_up": "It's charging up!",
    "recharging": "It needs to recharge!",
    "storing_energy": "{name} is storing energy!",
    "focusing": "{name} is tightening its focus!",
    "nothing_happened": "Nothing happened!",
    # Acting under a status
    "no_longer_frozen": "{name} is no longer frozen!",
    "frozen_solid": "{name} is frozen solid!",
    "fully_paralyzed": "{name} is paralyzed! It can't move!",
    "immobilized_by_love": "{name} is in love with {other} and can't move!",
    "flinched_cant_move": "{name} flinched and couldn't move!",
    "woke_up": "{name} woke up!",
    "fast_asleep": "{name} is fast asleep!",
    "no_longer_confused": "{name} is no longer confused!",
    "hurt_in_confusion": "{name} hurt itself in its confusion!",
    "loafing_around": "{name} is loafing around!",
    # Hitting
    "missed": "The attack missed!",
    "avoided": "{name} avoided the attack!",
    "protected": "{name} protected itself!",
    "attack_no_effect": "The attack had no effect!",
    "no_effect": "It had no effect!",
    "absorbed_move": "{name} absorbed the move with its {ability}!",
    "critical_hit": "A critical hit!",
    "super_effective": "It's super effective!",
    "not_very_effective": "It's not very effective...",
    "shot_out_of_air": "{name} was shot out of the air!",
    "fell_from_sky": "{name} fell from the sky!",
    "grounded": "{name} was grounded!",
    # Status moves
    "status_healed": "{name}'s {status} was healed!",
    "status_cleared": "{name}'s status was cleared!",
    "status_transferred": "{name} transferred its {status} to {other}!",
    "feels_refreshed": "{name} feels refreshed!",
    "rest_restored": "{name} slept and became healthy!",
    "bell_chimed": "A bell chimed, curing {side}'s team of their status!",
    "shared_pain": "The battlers shared their pain!",
    "makes_wish": "{name} makes a wish!",
    "replacement_restored": "{name}'s replacement will be restored!",
    # Stat stage moves
    "no_stat_can_go_higher": "{name}'s stats won't go any higher!",
    "stage_reset": "{name}'s {stat} returned to normal!",
    "stages_reset": "{name}'s stat changes were removed!",
    "all_stages_reset": "All stat changes were eliminated!",
    "stages_inverted": "{name}'s stat changes were inverted!",
    "psyched_up": "It psyched itself up!",
    "swapped_stat_changes": "{name} swapped its {stats} changes with {other}!",
    "shared_stats": "{name} shared its {stats} with {other}!",
    "speed_swapped": "The battlers swapped their speed!",
    "power_trick": "{name} switched its attack and defense!",
    "power_shift": "{name} switched its offensive and defensive stats!",
    "became_nimble": "{name} became nimble!",
    "flying_suppressed": "{name}'s flying type was suppressed!",
    # Volatile conditions set by moves
    "getting_pumped": "{name} is getting pumped!",
    "rage_building": "{name}'s rage is building!",
    "charging_electric": "{name} began charging power!",
    "planted_roots": "{name} planted its roots!",
    "magic_coat": "{name} shrouded itself with magic coat!",
    "imprisons": "{name} sealed the opponent's moves!",
    "bears_grudge": "{name} wants the opponent to bear a grudge!",
    "snatch_waiting": "{name} waits for a target to make a move!",
    "lucky_chant": "{name}'s team is shielded from critical hits!",
    "aqua_ring": "{name} surrounded itself with a veil of water!",
    "magnet_rise": "{name} levitated with electromagnetism!",
    "ion_deluge": "Electrons scattered across the field!",
    "fairy_lock": "No one will be able to run away during the next turn!",
    "laser_focus": "{name} concentrated intensely!",
    "last_stand": "{name} is making its last stand!",
    "nightmare": "{name} fell into a nightmare!",
    "embargo": "{name} can't use items anymore!",
    "hurled_into_air": "{name} was hurled into the air!",
    "electrified": "{name}'s moves have been electrified!",
    "powdered": "{name} is covered in powder!",
    "octolocked": "{name} can't escape the octolock!",
    "syrup_bomb": "{name} got covered in sticky candy syrup!",
    "protected_itself": "{name} protected itself!",
    "braced_itself": "{name} braced itself!",
    "wide_guard": "Wide guard protects {name}'s team!",
    "guards_itself": "{name} guards itself!",
    "crafty_shield": "Crafty shield protects {name}'s team!",
    "shields_itself": "{name} shields itself!",
    "bunkers_down": "{name} bunkers down!",
    "took_aim": "{name} took aim at {other}!",
    "identified": "{name} identified {other}!",
    "destiny_bond": "{name} is trying to take its foe down with it!",
    "cursed": "{name} was cursed!",
    "seeded": "{name} was seeded!",
    "drowsy": "{name} is drowsy!",
    "electric_terrain_alert": "The electric terrain keeps {name} alert!",
    "taunted": "{name} fell for the taunt!",
    "encored": "{name} got an encore!",
    "tormented": "{name} was subjected to torment!",
    "heal_blocked": "{name} was prevented from healing!",
    "move_disabled": "{name}'s {move} was disabled!",
    "aroma_veil_protects": "{name}'s aroma veil keeps it from being {verb}!",
    "too_oblivious_to_taunt": "{name} is too oblivious to be taunted!",
    "silenced": "{name} was silenced!",
    "voice_echoes": "{name}'s voice echoes!",
    "soundproof_song": "{name}'s soundproof keeps it from hearing the song!",
    "perish_song": "All pokemon will faint after 3 turns!",
    "already_perishing": "{name} is already perishing!",
    "squeezed": "{name} was squeezed!",
    "cant_escape": "{name} can't escape now!",
    "covered_in_tar": "{name} was covered in tar!",
    "ability_disabled": "{name}'s ability was disabled!",
    "ability_nullified": "{name}'s ability was nullified!",
    "flash_fire": "{name} used its flash fire to power up its fire moves!",
    "gulped_up": "{name} gulped up {prey}!",
    "tempo_cured_confusion": "{name}'s own tempo cured its confusion!",
    "fell_out_of_love": "{name} fell out of love!",
    "stopped_caring_taunt": "{name} is too oblivious to care about the taunt!",
    # Types
    "became_type": "{name} became {article} {type} type!",
    "added_type": "{name} became part {type} type!",
    "lost_type": "{name} lost its {type} type!",
    "type_matched": "{name}'s type changed to match {other}!",
    # Moves and PP
    "mimicked": "{name} learned {move}!",
    "sketched": "It sketched {move}!",
    "pp_reduced": "{name}'s {move} lost PP!",
    "foresaw_attack": "{name} foresaw an attack!",
    "future_sight_hit": "{name} took the future sight attack!",
    "stores_energy": "{name} stored energy!",
    "plasma_fists": "{name} electrified the field!",
    "poltergeist": "{name} is about to be attacked by its {item}!",
    # Items
    "flung": "{name} flung its {item}!",
    "item_consumed": "{name}'s {item} was consumed!",
    "item_corroded": "{name}'s {item} corroded away!",
    "berry_incinerated": "{name}'s berry was incinerated!",
    "lost_item": "{name} lost its {item}!",
    "gained_item": "{name} gained a {item}!",
    "gave_item": "{name} gave its {item} to {other}!",
    "swapped_items": "{name} and {other} swapped their items!",
    "recovered_item": "{name} recovered its {item}!",
    "picked_up": "{name} picked up a {item}!",
    "harvested": "{name} harvested a {item}!",
    "white_herb": "{name}'s white herb restored its lowered stats!",
    "red_card": "{name} held up its red card against {other}!",
    # Switching
    "fled_in_fear": "{name} fled in fear!",
    "kept_in_place": "{name} stays in place with {anchor}{source}!",
    "went_back": "{name} went back!",
    "was_released": "{name} was released!",
    "left_substitute": "{name} left behind a substitute!",
    "made_substitute": "{name} made a substitute!",
    # Side and field conditions
    "spikes_scattered": "Spikes were scattered around the feet of {side}'s team!",
    "toxic_spikes_scattered": "Toxic spikes were scattered around the feet of {side}'s team!",
    "stealth_rock": "Pointed stones float in the air around {side}'s team!",
    "sticky_web": "A sticky web spreads out on the ground around {side}'s team!",
    "screen_up": "{name}'s {screen} is up!",
    "screen_wore_off": "{name}'s {screen} wore off!",
    "mist": "{name}'s team became shrouded in mist!",
    "safeguard": "{name}'s team is protected by safeguard!",
    "tailwind": "{side}'s team gets a tailwind!",
    "mud_sport": "Electricity's power was weakened!",
    "water_sport": "Fire's power was weakened!",
    "court_changed": "The battlers swapped their side conditions!",
    "blew_away_fog": "{name} blew everything away!",
    "tidied_up": "{name} tidied up!",
    "gravity": "Gravity intensified!",
    "trick_room_started": "{name} twisted the dimensions!",
    "magic_room_started": "{name} created a bizarre area in which items lose their effects!",
    "wonder_room_started": "{name} created a bizarre area in which defense and special defense are swapped!",
    # End of turn
    "side_condition_ended": "{side}'s {condition} wore off!",
    "tailwind_ended": "{side}'s tailwind died down!",
    "water_sport_ended": "{side}'s water sport evaporated!",
    "no_longer_disabled": "{name}'s {move} is no longer disabled!",
    "taunt_ended": "{name}'s taunt has ended!",
    "heal_block_ended": "{name}'s heal block has ended!",
    "voice_returned": "{name}'s voice returned!",
    "magnet_rise_ended": "{name}'s magnet rise has ended!",
    "lucky_chant_ended": "{name} is no longer shielded by lucky chant!",
    "calmed_down": "{name} calms down!",
    "telekinesis_ended": "{name} was released from telekinesis!",
    "embargo_lifted": "{name} can use items again!",
    "encore_ended": "{name}'s encore is over!",
    "no_longer_bound": "{name} is no longer bound!",
    "ability_cured_status": "{name}'s {ability} cured its {status}!",
    "ability_woke_up": "{name}'s {ability} woke it up!",
    "ice_face_restored": "{name}'s ice face was restored by the hail!",
    "zen_mode_started": "{name} enters a zen state.",
    "zen_mode_ended": "{name}'s zen state ends!",
    "trick_room_ended": "The twisted dimensions returned to normal!",
    "magic_room_ended": "The bizarre area in which items lose their effects disappeared!",
    "wonder_room_ended": "The bizarre area in which defense and special defense are swapped disappeared!",
    "gravity_ended": "Gravity returns to normal!",
    # Battle result
    "no_replacement": "{side} did not send out a replacement!",
    "wins": "{side} wins!",
}
