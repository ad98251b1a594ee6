import crud


def test_print_template_outputs_yaml(tmp_path, capsys):
    rc = crud.main(['--config', str(tmp_path / 'missing.yml'), '--print-template'])
    out = capsys.readouterr().out
    assert rc == 0
    assert 'endpoints:' in out
    assert 'prefix: objects' in out


def test_invalid_config_returns_error(tmp_path, capsys):
    p = tmp_path / 'bad.yml'
    p.write_text('- a list\n', encoding='utf-8')
    rc = crud.main(['--config', str(p)])
    assert rc == 1
    assert 'Failed to load config' in capsys.readouterr().err


def test_null_port_reports_config_error(tmp_path, capsys):
    p = tmp_path / 'port.yml'
    p.write_text('port: null\n', encoding='utf-8')
    rc = crud.main(['--config', str(p)])
    assert rc == 1
    assert 'invalid port' in capsys.readouterr().err
