from alpops.ingestion.generator import GeneratorSettings, generate_instance


def test_default_settings_are_fresh_per_call():
	first = generate_instance()
	second = generate_instance()
	assert first == second
	assert first.name == "gen_n10_s42"
	assert first.num_runways == 1


def test_windows_contain_targets():
	inst = generate_instance(GeneratorSettings(num_aircraft=25, seed=3))
	inst.check()
	assert all(a.earliest <= a.target <= a.latest for a in inst.aircraft)
