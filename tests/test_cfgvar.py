from sopot.cfgvar import CfgVar


def test_default_value_and_initially_dirty():
    var = CfgVar(1920)
    assert var.value == 1920
    assert var.dirty is True


def test_default_bypasses_callback():
    var = CfgVar(5, lambda v: max(v, 128))
    assert var.value == 5


def test_assign_applies_callback():
    var = CfgVar(1920, lambda v: max(v, 128))
    var.assign(10)
    assert var.value == 128
    var.assign(640)
    assert var.value == 640


def test_assign_same_value_keeps_clean():
    var = CfgVar("abc")
    var.dirty = False
    var.assign("abc")
    assert var.dirty is False


def test_assign_changed_value_marks_dirty():
    var = CfgVar(True)
    var.dirty = False
    var.assign(False)
    assert var.dirty is True
    assert var.value is False


def test_corrected_to_same_value_stays_clean():
    var = CfgVar(32, lambda v: min(max(v, 2), 32))
    var.dirty = False
    var.assign(100)
    assert var.value == 32
    assert var.dirty is False


def test_value_setter_goes_through_assign():
    var = CfgVar(0, lambda v: min(v, 65535))
    var.value = 100000
    assert var.value == 65535