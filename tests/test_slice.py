"""Slice construction, access, elementwise arithmetic and broadcast mutators"""
import pytest
import warnings
from decimal import Decimal

from tablefi import Cell, CellKind, DIV0, Slice
from tablefi.errors import TablefiIndexError, TablefiParseError, TablefiTypeError


class TestCreation:
    """Building slices"""

    def test_from_strings(self):
        s = Slice(["1", "2", "3"])
        assert len(s) == 3
        assert str(s.cell(1)) == "2"
        assert s.cell(1).is_number()

    def test_from_decimals(self):
        s = Slice([Decimal(1), Decimal(2), Decimal(3)])
        assert len(s) == 3
        assert s.cell(1).to_decimal() == Decimal(2)

    def test_from_generator(self):
        s = Slice(str(i) for i in range(4))
        assert s.to_list() == ["0", "1", "2", "3"]

    def test_from_cells_copies(self):
        original = Cell("5")
        s = Slice([original, "hello"])
        s[0].add_value(1)
        assert str(original) == "5"
        assert s.to_list() == ["6", "hello"]

    def test_from_slice_copies(self):
        a = Slice(["1"])
        b = Slice(a)
        b.add_value(1)
        assert a.to_list() == ["1"]

    def test_new_fills(self):
        s = Slice.new("0", 3)
        s[0].add_value(1)
        assert s.to_list() == ["1", "0", "0"]

    def test_empty(self):
        s = Slice()
        assert len(s) == 0
        assert s.to_json() == "[]"
        assert s.kind() is None

    def test_text_argument_rejected(self):
        with pytest.raises(TablefiTypeError):
            Slice("abc")


class TestJson:
    """JSON array round trip"""

    def test_from_json(self):
        s = Slice.from_json('["a","b","1"]')
        assert len(s) == 3
        assert str(s.cell(0)) == "a"
        assert str(s.cell(1)) == "b"
        assert s.cell(2).to_decimal() == Decimal(1)
        assert s.to_json() == '["a","b","1"]'
        assert str(s) == '["a","b","1"]'

    def test_native_json_numbers(self):
        s = Slice.from_json('[1, 2.50, -3]')
        assert s.is_numeric()
        assert s.to_json() == '["1","2.50","-3"]'

    def test_not_an_array(self):
        with pytest.raises(TablefiParseError):
            Slice.from_json('{"a": 1}')

    def test_malformed(self):
        with pytest.raises(TablefiParseError):
            Slice.from_json('["a",')


class TestAccess:
    """Indexed reads and writes"""

    def test_cell_is_copy(self):
        s = Slice(["1", "2"])
        s.cell(0).add_value(10)
        assert s.to_list() == ["1", "2"]

    def test_mut_cell_is_live(self):
        s = Slice.from_json('["a","b","1"]')
        s.mut_cell(1).replace_value(Cell("c"))
        assert s.to_json() == '["a","c","1"]'

    @pytest.mark.parametrize("idx", [3, 100, -1])
    def test_out_of_range_is_none(self, idx):
        s = Slice(["a", "b", "c"])
        assert s.cell(idx) is None
        assert s.mut_cell(idx) is None

    def test_getitem_negative(self):
        s = Slice(["a", "b", "c"])
        assert str(s[-1]) == "c"

    def test_getitem_out_of_range(self):
        with pytest.raises(TablefiIndexError):
            Slice(["a"])[1]

    def test_getitem_range_returns_copy(self):
        s = Slice(["1", "2", "3"])
        part = s[1:]
        part.add_value(1)
        assert part.to_list() == ["3", "4"]
        assert s.to_list() == ["1", "2", "3"]

    def test_setitem(self):
        s = Slice(["1", "2"])
        s[1] = "x"
        assert s.to_list() == ["1", "x"]
        assert s[1].is_text()

    def test_iteration_yields_live_cells(self):
        s = Slice.from_json('["10","str","20"]')
        for cell in s:
            if cell.to_decimal() is not None:
                cell.add_value(1)
        assert s.to_json() == '["11","str","21"]'

    def test_kind(self):
        assert Slice(["1", "2"]).kind() is CellKind.NUMBER
        assert Slice(["a", "b"]).kind() is CellKind.TEXT
        assert Slice(["1", "b"]).kind() is None

    def test_equality(self):
        assert Slice(["1", "a"]) == Slice(["1.0", "a"])
        assert Slice(["1"]) != Slice(["1", "2"])


class TestAddSub:
    """Elementwise + and -"""

    def test_add(self):
        s1 = Slice.from_json('["1","2","3"]')
        s2 = Slice.from_json('["4","5","6"]')
        s3 = s1 + s2
        assert s3.to_json() == '["5","7","9"]'
        s3.add_value(Decimal(1))
        assert s3.to_json() == '["6","8","10"]'

    def test_add_with_text(self):
        s1 = Slice.from_json('["1","2","3"]')
        s4 = Slice.from_json('["4","a","6"]')
        assert (s1 + s4).to_json() == '["5","2","9"]'
        s5 = s4 + s1
        assert s5.to_json() == '["5","a","9"]'
        s5.add_value(1)
        assert s5.to_json() == '["6","a","10"]'

    def test_sub(self):
        s1 = Slice.from_json('["1","2","3"]')
        s2 = Slice.from_json('["4","7","10"]')
        s3 = s1 - s2
        assert s3.to_json() == '["-3","-5","-7"]'
        s3.sub_value(1)
        assert s3.to_json() == '["-4","-6","-8"]'

    def test_sub_with_text(self):
        s1 = Slice.from_json('["1","2","3"]')
        s4 = Slice.from_json('["4","a","7"]')
        assert (s1 - s4).to_json() == '["-3","2","-4"]'
        s5 = s4 - s1
        assert s5.to_json() == '["3","a","4"]'
        s5.sub_value(1)
        assert s5.to_json() == '["2","a","3"]'

    def test_operands_unchanged(self):
        s1 = Slice(["1", "2"])
        s2 = Slice(["3", "4"])
        s1 + s2
        assert s1.to_list() == ["1", "2"]
        assert s2.to_list() == ["3", "4"]


class TestMulDiv:
    """Elementwise * and /"""

    def test_mul(self):
        s1 = Slice.from_json('["1","2","3"]')
        s2 = Slice.from_json('["2","3","4"]')
        s3 = s1 * s2
        assert s3.to_json() == '["2","6","12"]'
        s3.mul_value(2)
        assert s3.to_json() == '["4","12","24"]'

    def test_mul_with_text(self):
        s1 = Slice.from_json('["1","2","3"]')
        s4 = Slice.from_json('["4","a","5"]')
        assert (s1 * s4).to_json() == '["4","2","15"]'
        s5 = s4 * s1
        assert s5.to_json() == '["4","a","15"]'
        s5.mul_value(2)
        assert s5.to_json() == '["8","a","30"]'

    def test_div(self):
        s1 = Slice.from_json('["1","2","3"]')
        s2 = Slice.from_json('["2","8","15"]')
        s3 = s1 / s2
        assert s3.to_json() == '["0.5","0.25","0.2"]'
        s3.div_value(2)
        assert s3.to_json() == '["0.25","0.125","0.1"]'

    def test_div_with_text_and_zero(self):
        s1 = Slice.from_json('["1","2","3"]')
        s4 = Slice.from_json('["4","a","6"]')
        assert (s1 / s4).to_json() == '["0.25","2","0.5"]'
        s5 = s4 / s1
        assert s5.to_json() == '["4","a","2"]'
        s5.div_value(2)
        assert s5.to_json() == '["2","a","1"]'
        s5.div_value(0)
        assert s5.to_json() == '["#DIV/0","a","#DIV/0"]'

    def test_div_by_zero_cell(self):
        result = Slice(["1", "2"]) / Slice(["0", "1"])
        assert result.to_list() == [DIV0, "2"]

    def test_div_zero_is_idempotent(self):
        s = Slice(["4", "x"])
        s.div_value(0)
        s.div_value(0)
        s.mul_value(3)
        assert s.to_list() == [DIV0, "x"]


class TestLengthMismatch:
    """Identity padding and truncation"""

    @pytest.mark.parametrize("op,expected", [
        ("__add__", ["2", "2", "3"]),
        ("__sub__", ["0", "2", "3"]),
        ("__mul__", ["5", "2", "3"]),
        ("__truediv__", ["0.2", "2", "3"]),
    ])
    def test_short_right_uses_identity(self, op, expected):
        left = Slice(["1", "2", "3"])
        right = Slice(["1"]) if op in ("__add__", "__sub__") else Slice(["5"])
        assert getattr(left, op)(right).to_list() == expected

    def test_long_right_is_truncated(self):
        result = Slice(["1"]) + Slice(["1", "2", "3"])
        assert result.to_list() == ["2"]

    def test_empty_right(self):
        assert (Slice(["1", "a"]) * Slice()).to_list() == ["1", "a"]

    @pytest.mark.parametrize("op", ["__add__", "__sub__", "__mul__", "__truediv__"])
    def test_identity_padding_keeps_long_values(self, op):
        literal = "123456789012345678901234567890.5"
        result = getattr(Slice([literal]), op)(Slice())
        if op == "__truediv__":
            # division still rounds to 28 significant digits
            assert result.to_list() == ["123456789012345678901234567900"]
        else:
            assert result.to_list() == [literal]


class TestOperandForms:
    """Lists, scalars and reflected operators"""

    def test_list_operand(self):
        assert (Slice(["1", "2"]) + ["10", "20"]).to_list() == ["11", "22"]

    def test_scalar_broadcast(self):
        assert (Slice(["1", "a", "3"]) * Decimal(2)).to_list() == ["2", "a", "6"]
        assert (Slice(["1", "2"]) / 0).to_list() == [DIV0, DIV0]

    def test_reflected_scalar(self):
        assert (10 - Slice(["1", "2"])).to_list() == ["9", "8"]

    def test_reflected_list(self):
        assert (["1", "2"] + Slice(["3", "4"])).to_list() == ["4", "6"]

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            Slice(["1"]) + object()


class TestBooleanBehavior:
    """Truthiness of slices"""

    def test_empty_slice_is_falsy(self):
        assert not Slice()

    def test_numeric_slice_warns(self):
        with pytest.warns(UserWarning, match="boolean context"):
            assert Slice(["1"])

    def test_text_slice_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert Slice(["a"])
