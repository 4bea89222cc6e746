from auction_board.parsing.csv_line import tokenize_line


def test_plain_fields():
    assert tokenize_line("a,b,c") == ["a", "b", "c"]


def test_quoted_field_keeps_comma():
    assert tokenize_line('"a,b",c') == ["a,b", "c"]


def test_empty_line_is_one_empty_field():
    assert tokenize_line("") == [""]


def test_unterminated_quote_swallows_rest_of_line():
    assert tokenize_line('"a,b') == ["a,b"]
    assert tokenize_line('x,"y,z') == ["x", "y,z"]


def test_fields_are_trimmed_and_trailing_empty_kept():
    assert tokenize_line("  Alice , 50000 ,") == ["Alice", "50000", ""]


def test_quotes_are_dropped_not_escaped():
    # Doubled quotes toggle twice and vanish
    assert tokenize_line('"Rahul ""RD"" Dravid",1000') == ["Rahul RD Dravid", "1000"]


def test_indian_grouped_amount_in_quotes():
    assert tokenize_line('Sachin,"1,20,000"\r') == ["Sachin", "1,20,000"]
