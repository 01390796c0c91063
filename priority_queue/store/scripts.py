"""
Server-side Lua scripts.

Scripts run atomically on the Redis server, so no other client can observe
the ordering between the read and the remove.
"""

# Pop the first ARGV[1] members of the ordering at KEYS[1] and record each of
# them in the audit set at KEYS[2]. Returns the popped members, lowest score first.
RANKED_DEQUEUE_SCRIPT = """
local members = redis.call('ZRANGE', KEYS[1], 0, tonumber(ARGV[1]) - 1)
if #members > 0 then
    redis.call('ZREMRANGEBYRANK', KEYS[1], 0, #members - 1)
    for _, member in ipairs(members) do
        redis.call('SADD', KEYS[2], member)
    end
end
return members
"""

# Pop every member of the ordering at KEYS[1] and set the release flag at
# KEYS[2] to ARGV[1]. An empty ordering is left alone and the flag is not set.
RELEASE_ALL_SCRIPT = """
local members = redis.call('ZRANGE', KEYS[1], 0, -1)
if #members > 0 then
    redis.call('ZREMRANGEBYSCORE', KEYS[1], '-inf', '+inf')
    redis.call('SET', KEYS[2], ARGV[1])
end
return members
"""
