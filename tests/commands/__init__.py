"""Tests for command implementation modules.

Test Files and Coverage:
========================

| Test File    | Test Classes                          | Tested Constructs                            | Tested Functionalities                     |
|--------------|---------------------------------------|----------------------------------------------|--------------------------------------------|
| test_part.py | OutputPathsTest                       | output_paths()                               | Bucket file naming                         |
|              | DoPartTest                            | do_part()                                    | 14 files, formats, no overwrite, warnings  |
|              | PartitionStatsTest                    | partition_stats()                            | Statistics text                            |
| test_sort.py | DoSortTest                            | do_sort(), process_log()                     | Stable path sort, header note, no overwrite|
| test_root.py | DoChangeRootTest                      | do_change_root()                             | Prefix stripping, omitted entries, counts  |
| test_hash.py | HashdeepArgumentsTest, DoHashTest     | get_hashdeep_arguments(), do_hash()          | Command line, mocked hashdeep, failures    |
"""
