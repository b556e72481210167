import io

from yambs.output import (
    Output,
    OutputType,
    ProgressBar,
    filter_string,
    print_error_colored,
)


def test_status_text_type_is_white():
    assert OutputType.STATUS.as_color() == "white"


def test_warning_text_type_is_yellow():
    assert OutputType.WARNING.as_color() == "yellow"


def test_error_text_type_is_red():
    assert OutputType.ERROR.as_color() == "red"


def test_filter_string_remove_ar():
    text = "ar: asdfsadfsadf \n/sdadfsadfasfsf/"
    assert filter_string(text) == "/sdadfsadfasfsf/"


def test_filter_string_nothing_to_filter():
    text = "This is a string with nothing to be filtered."
    assert filter_string(text) == text


def test_filter_string_remove_ar_creating_multiple_lines():
    assert filter_string("ar: creating visitorlibrary.a") == ""


def test_filter_string_remove_ar_creating():
    text = "\nar: creating /home/fredrik/Documents/Tests/AStarPathFinder/PlanGenerator/googletest/"
    assert filter_string(text) == ""


def test_status_goes_to_stdout_with_prefix(capsys):
    Output().status("hello")
    captured = capsys.readouterr()
    assert "yambs: hello" in captured.out
    assert captured.err == ""


def test_status_without_prefix(capsys):
    Output().status_without_prefix("hello")
    captured = capsys.readouterr()
    assert "hello" in captured.out
    assert "yambs:" not in captured.out


def test_warning_goes_to_stdout(capsys):
    Output().warning("careful")
    captured = capsys.readouterr()
    assert "yambs: careful" in captured.out


def test_error_goes_to_stderr(capsys):
    Output().error("broken")
    captured = capsys.readouterr()
    assert "yambs: broken" in captured.err
    assert captured.out == ""


def test_print_error_colored_has_no_prefix(capsys):
    print_error_colored("compiler said no", Output())
    captured = capsys.readouterr()
    assert "compiler said no" in captured.err
    assert "yambs:" not in captured.err


def test_progress_bar_position_and_message():
    stream = io.StringIO()
    pb = ProgressBar(10, file=stream)
    pb.set_position(3)
    pb.set_message("[3/10] Building...")
    assert pb.bar.n == 3
    assert pb.bar.desc == "[3/10] Building..."
    pb.fail_with_message("failed")
    assert "failed" in stream.getvalue()


def test_progress_bar_finish_writes_message():
    stream = io.StringIO()
    pb = ProgressBar(2, file=stream)
    pb.finish_with_message("done building")
    assert "done building" in stream.getvalue()